"""Module s0_coordinates : Conversion adresse de cellule ↔ pixels."""

from .types import Grid, CellAddress, BoundingBox, ScreenPoint, CellRect, GridRegion
from .geometry import (
    cell_center,
    cell_rect,
    auto_grid,
    normalize_region,
    iter_cells,
    spread_cells,
)

__all__ = [
    # Types
    "Grid",
    "CellAddress",
    "BoundingBox",
    "ScreenPoint",
    "CellRect",
    "GridRegion",
    # Geometry
    "cell_center",
    "cell_rect",
    "auto_grid",
    "normalize_region",
    "iter_cells",
    "spread_cells",
]
