"""Module s7_debug : Overlay visuel et logs structurés."""

from .overlay import GridOverlay
from .logger import ScanLogger, CellLog, ActionLog

__all__ = [
    "GridOverlay",
    "ScanLogger",
    "CellLog",
    "ActionLog",
]
