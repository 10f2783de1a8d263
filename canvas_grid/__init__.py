"""canvas-grid : tester un canvas HTML comme une grille de cellules."""

from canvas_grid.canvas_grid import CanvasGrid
from canvas_grid.errors import (
    CanvasGridError,
    SetupError,
    CanvasNotFound,
    GeometryError,
    MissingBoundingBox,
    SamplingSoftFailure,
    SamplingError,
    TooltipTimeout,
)
from canvas_grid.lib.s0_coordinates import Grid, CellAddress, BoundingBox, ScreenPoint, CellRect, GridRegion
from canvas_grid.lib.s1_sampling import RGBA, ColorSample, within
from canvas_grid.lib.s4_scanner import ScanReport, QuickCheckResult, RegionTextResult
from canvas_grid.lib.s7_debug import ScanLogger

__all__ = [
    "CanvasGrid",
    # Erreurs
    "CanvasGridError",
    "SetupError",
    "CanvasNotFound",
    "GeometryError",
    "MissingBoundingBox",
    "SamplingSoftFailure",
    "SamplingError",
    "TooltipTimeout",
    # Types
    "Grid",
    "CellAddress",
    "BoundingBox",
    "ScreenPoint",
    "CellRect",
    "GridRegion",
    "RGBA",
    "ColorSample",
    "within",
    "ScanReport",
    "QuickCheckResult",
    "RegionTextResult",
    "ScanLogger",
]
