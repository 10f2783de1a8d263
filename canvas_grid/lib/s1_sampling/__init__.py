"""Module s1_sampling : Couleur moyenne d'une cellule."""

from .types import RGBA, ColorSample, TIER_DIRECT, TIER_CAPTURE
from .color import average_rgba, within
from .strategies import DirectPixelRead, RegionCapture
from .sampler import ColorSampler

__all__ = [
    "RGBA",
    "ColorSample",
    "TIER_DIRECT",
    "TIER_CAPTURE",
    "average_rgba",
    "within",
    "DirectPixelRead",
    "RegionCapture",
    "ColorSampler",
]
