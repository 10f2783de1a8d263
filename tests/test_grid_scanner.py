from unittest.mock import Mock

import pytest

from canvas_grid.errors import CanvasNotFound, MissingBoundingBox
from canvas_grid.lib.s0_coordinates import CellAddress, Grid
from canvas_grid.lib.s1_sampling import ColorSampler
from canvas_grid.lib.s2_interaction import SCAN_HOVER, MouseInteractions
from canvas_grid.lib.s3_tooltip import TooltipCapture, TooltipDetector, TooltipObservation
from canvas_grid.lib.s4_scanner import SOURCE_NONE, SOURCE_TOOLTIP, GridScanner


class FakeCanvasApp:
    """Simule une application : un tooltip apparaît quand on survole certaines cellules."""

    def __init__(self, tooltips=None, broken=()):
        self.tooltips = tooltips or {}
        self.broken = set(broken)
        self.hovered = None
        self.visited = []

    def hover(self, col, row, profile=None):
        self.visited.append((col, row))
        if (col, row) in self.broken:
            raise RuntimeError("boom")
        self.hovered = (col, row)

    def visible(self, tooltip_selectors=None):
        text = self.tooltips.get(self.hovered)
        if text is None:
            return []
        return [TooltipObservation(selector=".tooltip", text=text)]

    def capture(self, hover_fn, col, row, wait_time=0, tooltip_selectors=None, capture_screenshot=False):
        hover_fn(col, row)
        text = self.tooltips.get((col, row))
        if text is None:
            return TooltipCapture(visible=False)
        return TooltipCapture(visible=True, selector=".tooltip", text=text, html=text)


def _scanner(page, grid, app, logger=None, sampler=None):
    mouse = Mock(spec=MouseInteractions)
    mouse.hover_cell.side_effect = app.hover
    tooltips = Mock(spec=TooltipDetector)
    tooltips.get_visible_tooltips.side_effect = app.visible
    tooltips.hover_cell_and_capture_tooltip.side_effect = app.capture
    return GridScanner(page, grid, mouse, tooltips, sampler=sampler, logger=logger)


# ---------------------------------------------------------------------- #
# Scan complet                                                           #
# ---------------------------------------------------------------------- #

def test_scan_visits_cells_row_major(page):
    app = FakeCanvasApp()
    report = _scanner(page, Grid(3, 2), app).scan_all_cells_for_tooltips(hover_delay=0)

    assert app.visited == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]
    assert report.total_cells == 6
    assert [r.address.to_tuple() for r in report.results] == app.visited
    assert not report.summary.has_any_tooltips


def test_scan_uses_scan_hover_profile(page):
    scanner = _scanner(page, Grid(1, 1), FakeCanvasApp())
    scanner.scan_all_cells_for_tooltips(hover_delay=0)
    scanner.mouse.hover_cell.assert_called_once_with(0, 0, SCAN_HOVER)
    scanner.mouse.move_to_neutral.assert_called_once_with()


def test_scan_reports_tooltips(page):
    app = FakeCanvasApp(tooltips={(1, 0): "Alpha", (2, 1): "Gamma"})
    report = _scanner(page, Grid(3, 2), app).scan_all_cells_for_tooltips(hover_delay=0)

    assert report.cells_with_tooltips == 2
    assert report.summary.tooltip_cells == [CellAddress(1, 0), CellAddress(2, 1)]
    assert report.summary.dom_tooltips == 2
    assert report.results[1].tooltip_text == "Alpha"
    assert report.to_dict()["summary"]["has_any_tooltips"] is True


def test_scan_isolates_cell_failures(page):
    app = FakeCanvasApp(tooltips={(2, 1): "Gamma"}, broken={(1, 1)})
    report = _scanner(page, Grid(3, 2), app).scan_all_cells_for_tooltips(hover_delay=0)

    assert report.total_cells == 6
    assert report.failed_cells == 1
    failed = report.results[4]
    assert failed.address == CellAddress(1, 1)
    assert not failed.has_tooltip
    assert failed.error == "RuntimeError: boom"
    assert report.results[5].has_tooltip


def test_scan_progress_callback_errors_are_ignored(page):
    seen = []

    def callback(progress):
        seen.append((progress.current, progress.total, progress.address.to_tuple()))
        raise ValueError("UI cassée")

    _scanner(page, Grid(2, 2), FakeCanvasApp()).scan_all_cells_for_tooltips(hover_delay=0, progress_callback=callback)

    assert seen == [(1, 4, (0, 0)), (2, 4, (1, 0)), (3, 4, (0, 1)), (4, 4, (1, 1))]


def test_scan_logs_each_cell(page):
    logger = Mock()
    _scanner(page, Grid(2, 1), FakeCanvasApp(), logger=logger).scan_all_cells_for_tooltips(hover_delay=0)
    assert logger.log_cell.call_count == 2


def test_scan_survives_failing_logger(page):
    logger = Mock()
    logger.log_cell.side_effect = OSError("disk full")

    report = _scanner(page, Grid(3, 2), FakeCanvasApp(), logger=logger).scan_all_cells_for_tooltips(hover_delay=0)

    assert report.total_cells == 6
    assert report.failed_cells == 0
    assert logger.log_cell.call_count == 6


def test_scan_with_colors(page):
    sampler = Mock(spec=ColorSampler)
    sampler.sample_cell.return_value = (1, 2, 3, 255)
    report = _scanner(page, Grid(2, 1), FakeCanvasApp(), sampler=sampler).scan_all_cells_for_tooltips(
        hover_delay=0, sample_colors=True
    )
    assert [r.color for r in report.results] == [(1, 2, 3, 255), (1, 2, 3, 255)]


@pytest.mark.parametrize("error", [CanvasNotFound("canvas", 0), MissingBoundingBox()])
def test_scan_setup_errors_abort_before_hover(page, error):
    scanner = _scanner(page, Grid(3, 2), FakeCanvasApp())
    scanner.mouse.get_cell_center.side_effect = error

    with pytest.raises(type(error)):
        scanner.scan_all_cells_for_tooltips(hover_delay=0)
    scanner.mouse.hover_cell.assert_not_called()


# ---------------------------------------------------------------------- #
# Sondage                                                                #
# ---------------------------------------------------------------------- #

def test_check_without_tooltips_respects_cap(page):
    app = FakeCanvasApp()
    result = _scanner(page, Grid(10, 10), app).has_any_tooltips(max_cells_to_check=5, hover_delay=0)

    assert not result.found
    assert result.cells_checked == 5
    assert len(app.visited) == 5


def test_check_default_cap(page):
    app = FakeCanvasApp()
    result = _scanner(page, Grid(10, 10), app).has_any_tooltips(hover_delay=0)
    assert len(app.visited) <= 20
    assert result.cells_checked == len(app.visited)


def test_check_stops_at_first_tooltip(page):
    app = FakeCanvasApp(tooltips={(1, 0): "Alpha"})
    result = _scanner(page, Grid(2, 2), app).has_any_tooltips(hover_delay=0)

    assert result.found
    assert result.first_tooltip_at == CellAddress(1, 0)
    assert result.tooltip_text == "Alpha"
    assert app.visited == [(0, 0), (1, 0)]


def test_check_skips_failing_cells(page):
    app = FakeCanvasApp(tooltips={(1, 0): "Alpha"}, broken={(0, 0)})
    result = _scanner(page, Grid(2, 2), app).has_any_tooltips(hover_delay=0)
    assert result.found
    assert result.cells_checked == 2


# ---------------------------------------------------------------------- #
# Extraction de texte                                                    #
# ---------------------------------------------------------------------- #

TEXTS = {(0, 0): "A", (1, 0): " B ", (1, 1): "D", (2, 2): "I"}


def test_region_text_joined_in_order(page):
    result = _scanner(page, Grid(3, 3), FakeCanvasApp(tooltips=TEXTS)).select_cells_and_extract_text(
        0, 0, 1, 1, hover_delay=0
    )

    assert result.total_cells == 4
    assert result.cells_with_text == 3
    assert result.combined_text == "A | B | D"
    assert [c.source for c in result.cells] == [SOURCE_TOOLTIP, SOURCE_TOOLTIP, SOURCE_NONE, SOURCE_TOOLTIP]


def test_region_reversed_equals_ordered(page):
    ordered = _scanner(page, Grid(3, 3), FakeCanvasApp(tooltips=TEXTS)).select_cells_and_extract_text(
        0, 0, 1, 1, hover_delay=0
    )
    reversed_ = _scanner(page, Grid(3, 3), FakeCanvasApp(tooltips=TEXTS)).select_cells_and_extract_text(
        1, 1, 0, 0, hover_delay=0
    )
    assert reversed_.region == ordered.region
    assert reversed_.combined_text == ordered.combined_text


def test_region_is_clamped(page):
    app = FakeCanvasApp(tooltips=TEXTS)
    result = _scanner(page, Grid(3, 3), app).select_cells_and_extract_text(1, 1, 9, 9, hover_delay=0)
    assert result.region.to_tuple() == (1, 1, 2, 2)
    assert len(app.visited) == 4


def test_region_without_text(page):
    result = _scanner(page, Grid(2, 2), FakeCanvasApp()).select_cells_and_extract_text(0, 0, 1, 1, hover_delay=0)
    assert result.cells_with_text == 0
    assert result.combined_text is None


def test_region_include_coordinates(page):
    result = _scanner(page, Grid(3, 3), FakeCanvasApp(tooltips=TEXTS)).select_cells_and_extract_text(
        2, 2, 2, 2, hover_delay=0, include_coordinates=True
    )
    assert result.combined_text == "(2,2): I"


def test_region_cell_failure_is_isolated(page):
    app = FakeCanvasApp(tooltips=TEXTS, broken={(0, 0)})
    result = _scanner(page, Grid(3, 3), app).select_cells_and_extract_text(0, 0, 1, 0, hover_delay=0)
    assert result.combined_text == "B"
    assert result.cells[0].source == SOURCE_NONE


def test_row_and_column_text(page):
    scanner = _scanner(page, Grid(3, 3), FakeCanvasApp(tooltips=TEXTS))

    row = scanner.extract_row_text(0, hover_delay=0)
    assert row.index == 0
    assert row.combined_text == "A | B"

    column = scanner.extract_column_text(1, hover_delay=0)
    assert column.combined_text == "B | D"

    assert scanner.extract_cell_text(2, 2, hover_delay=0) == "I"
    assert scanner.extract_cell_text(2, 0, hover_delay=0) is None
