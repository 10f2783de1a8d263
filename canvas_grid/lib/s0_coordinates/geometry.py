"""Conversion adresse de cellule ↔ pixels du viewport.

Fonctions pures : aucune I/O, pas d'état partagé.
"""

import math
from typing import Iterator, List, Optional

from canvas_grid.config import AUTO_GRID_BUCKETS, AUTO_GRID_LARGE
from canvas_grid.errors import MissingBoundingBox

from .types import BoundingBox, CellAddress, CellRect, Grid, GridRegion, ScreenPoint


def _require_box(box: Optional[BoundingBox]) -> BoundingBox:
    if box is None or box.is_empty:
        raise MissingBoundingBox()
    return box


def cell_center(box: Optional[BoundingBox], grid: Grid, address: CellAddress) -> ScreenPoint:
    """Retourne le centre d'une cellule en pixels du viewport."""
    box = _require_box(box)
    x = box.x + (box.width / grid.cols) * (address.col + 0.5)
    y = box.y + (box.height / grid.rows) * (address.row + 0.5)
    return ScreenPoint(x=x, y=y)


def cell_rect(box: Optional[BoundingBox], grid: Grid, address: CellAddress) -> CellRect:
    """Retourne le rectangle d'une cellule.

    Les bords sont calculés depuis l'origine de la box (et non par cumul),
    deux cellules voisines partagent donc exactement la même frontière.
    """
    box = _require_box(box)
    left = box.x + box.width * address.col / grid.cols
    right = box.x + box.width * (address.col + 1) / grid.cols
    top = box.y + box.height * address.row / grid.rows
    bottom = box.y + box.height * (address.row + 1) / grid.rows
    return CellRect(x=left, y=top, width=right - left, height=bottom - top)


def auto_grid(box: Optional[BoundingBox]) -> Optional[Grid]:
    """Grille heuristique : grossière pour les petits canvas, plus dense pour les grands."""
    if box is None or box.is_empty:
        return None
    max_dim = max(box.width, box.height)
    for limit, (cols, rows) in AUTO_GRID_BUCKETS:
        if max_dim < limit:
            return Grid(cols, rows)
    return Grid(*AUTO_GRID_LARGE)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def normalize_region(grid: Grid, start_col: int, start_row: int, end_col: int, end_row: int) -> GridRegion:
    """Ordonne chaque axe (start ≤ end) puis borne les deux extrémités dans la grille."""
    col_lo, col_hi = sorted((start_col, end_col))
    row_lo, row_hi = sorted((start_row, end_row))
    return GridRegion(
        start_col=_clamp(col_lo, 0, grid.cols - 1),
        start_row=_clamp(row_lo, 0, grid.rows - 1),
        end_col=_clamp(col_hi, 0, grid.cols - 1),
        end_row=_clamp(row_hi, 0, grid.rows - 1),
    )


def iter_cells(grid: Grid, region: Optional[GridRegion] = None) -> Iterator[CellAddress]:
    """Parcours row-major (ligne externe, colonne interne)."""
    if region is None:
        region = GridRegion(0, 0, grid.cols - 1, grid.rows - 1)
    for row in range(region.start_row, region.end_row + 1):
        for col in range(region.start_col, region.end_col + 1):
            yield CellAddress(col=col, row=row)


def spread_cells(grid: Grid, max_cells: int) -> List[CellAddress]:
    """Sélectionne au plus max_cells cellules réparties sur la grille.

    Pas de parcours : max(1, floor(cols / sqrt(max_cells))) sur chaque axe.
    """
    if max_cells <= 0:
        return []
    root = math.sqrt(max_cells)
    step_col = max(1, int(grid.cols // root))
    step_row = max(1, int(grid.rows // root))

    cells: List[CellAddress] = []
    for row in range(0, grid.rows, step_row):
        for col in range(0, grid.cols, step_col):
            cells.append(CellAddress(col=col, row=row))
            if len(cells) >= max_cells:
                return cells
    return cells
