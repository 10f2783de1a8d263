import pytest

from canvas_grid.errors import GeometryError, MissingBoundingBox
from canvas_grid.lib.s0_coordinates import (
    BoundingBox,
    CellAddress,
    Grid,
    auto_grid,
    cell_center,
    cell_rect,
    iter_cells,
    normalize_region,
    spread_cells,
)


def test_cell_center_known_value():
    box = BoundingBox(x=10, y=10, width=200, height=150)
    center = cell_center(box, Grid(4, 3), CellAddress(col=1, row=2))
    assert center.x == 85
    assert center.y == 135


@pytest.mark.parametrize("cols,rows,box", [
    (4, 3, BoundingBox(10, 10, 200, 150)),
    (7, 3, BoundingBox(0.5, 3.25, 333.3, 101)),
    (1, 1, BoundingBox(0, 0, 5, 5)),
])
def test_cell_rects_tile_the_box(cols, rows, box):
    grid = Grid(cols, rows)
    for row in range(rows):
        rects = [cell_rect(box, grid, CellAddress(col, row)) for col in range(cols)]
        assert sum(r.width for r in rects) == pytest.approx(box.width)
        for left, right in zip(rects, rects[1:]):
            assert left.right == pytest.approx(right.x)
        for r in rects:
            assert r.x >= box.x
            assert r.right <= box.x + box.width + 1e-9

    for col in range(cols):
        rects = [cell_rect(box, grid, CellAddress(col, row)) for row in range(rows)]
        assert sum(r.height for r in rects) == pytest.approx(box.height)
        for top, bottom in zip(rects, rects[1:]):
            assert top.bottom == pytest.approx(bottom.y)
        assert rects[0].y == box.y


@pytest.mark.parametrize("missing", [None, BoundingBox(10, 10, 0, 50)])
def test_missing_box_raises(missing):
    with pytest.raises(MissingBoundingBox) as exc:
        cell_center(missing, Grid(2, 2), CellAddress(0, 0))
    assert isinstance(exc.value, GeometryError)
    assert str(exc.value) == "no canvas bbox"


def test_grid_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        Grid(0, 3)
    with pytest.raises(ValueError):
        Grid(3, -1)


def test_bounding_box_from_rect_accepts_left_top():
    box = BoundingBox.from_rect({"left": 4, "top": 6, "width": 10, "height": 20})
    assert box == BoundingBox(4, 6, 10, 20)
    assert BoundingBox.from_rect(None) is None


@pytest.mark.parametrize("width,height,expected", [
    (300, 200, Grid(6, 4)),
    (200, 600, Grid(10, 8)),
    (1200, 800, Grid(14, 10)),
])
def test_auto_grid_buckets(width, height, expected):
    assert auto_grid(BoundingBox(0, 0, width, height)) == expected


def test_auto_grid_without_box():
    assert auto_grid(None) is None


def test_iter_cells_row_major():
    cells = [c.to_tuple() for c in iter_cells(Grid(3, 2))]
    assert cells == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]


def test_normalize_region_reversed_equals_ordered():
    grid = Grid(5, 5)
    assert normalize_region(grid, 3, 4, 1, 2) == normalize_region(grid, 1, 2, 3, 4)


def test_normalize_region_clamps_both_ends():
    region = normalize_region(Grid(4, 3), -2, 1, 10, 7)
    assert region.to_tuple() == (0, 1, 3, 2)

    # entièrement hors grille : ramenée sur la dernière cellule, jamais vide
    outside = normalize_region(Grid(4, 3), 8, 8, 9, 9)
    assert outside.to_tuple() == (3, 2, 3, 2)
    assert outside.cell_count == 1


def test_region_iteration_stays_inside_region():
    grid = Grid(6, 6)
    region = normalize_region(grid, 4, 3, 2, 1)
    cells = list(iter_cells(grid, region))
    assert len(cells) == region.cell_count == 9
    assert all(region.contains(c) for c in cells)


def test_spread_cells_respects_cap():
    cells = spread_cells(Grid(10, 10), 5)
    assert len(cells) == 5
    assert cells[0] == CellAddress(0, 0)
    assert cells[1] == CellAddress(4, 0)


def test_spread_cells_small_grid_visits_every_cell():
    cells = spread_cells(Grid(2, 2), 20)
    assert [c.to_tuple() for c in cells] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_spread_cells_zero_cap():
    assert spread_cells(Grid(3, 3), 0) == []
