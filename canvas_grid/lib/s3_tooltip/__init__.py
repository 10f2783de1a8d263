"""Module s3_tooltip : Détection des tooltips DOM."""

from .types import TooltipObservation, TooltipCapture
from .detector import TooltipDetector, DEFAULT_TOOLTIP_SELECTORS

__all__ = [
    "TooltipObservation",
    "TooltipCapture",
    "TooltipDetector",
    "DEFAULT_TOOLTIP_SELECTORS",
]
