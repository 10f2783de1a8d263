"""Module s2_interaction : Pointeur synthétique sur les cellules."""

from .types import HoverProfile, DragProfile, DEFAULT_HOVER, TOOLTIP_HOVER, SCAN_HOVER
from .pointer import PointerTracker
from .mouse import MouseInteractions

__all__ = [
    "HoverProfile",
    "DragProfile",
    "DEFAULT_HOVER",
    "TOOLTIP_HOVER",
    "SCAN_HOVER",
    "PointerTracker",
    "MouseInteractions",
]
