"""
Façade de session : une grille logique posée sur un canvas de la page.

Exemple:
    grid = CanvasGrid(driver).locator("canvas#board").grid_size(10, 8).attach()
    grid.hover_cell(3, 2)
    report = grid.scan_all_cells_for_tooltips()
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from canvas_grid.config import COLOR_TOLERANCE, DEFAULT_GRID, OVERLAY_CONFIG, SCAN_CONFIG, TOOLTIP_CONFIG
from canvas_grid.errors import SetupError
from canvas_grid.lib.s0_browser import PageDriver
from canvas_grid.lib.s0_coordinates import Grid, ScreenPoint, auto_grid
from canvas_grid.lib.s1_sampling import RGBA, ColorSample, ColorSampler, within
from canvas_grid.lib.s2_interaction import DragProfile, HoverProfile, MouseInteractions, PointerTracker
from canvas_grid.lib.s3_tooltip import TooltipCapture, TooltipDetector, TooltipObservation
from canvas_grid.lib.s4_scanner import GridScanner, LineTextResult, QuickCheckResult, RegionTextResult, ScanReport
from canvas_grid.lib.s7_debug import GridOverlay, ScanLogger


class CanvasGrid:
    """Point d'entrée de la librairie (API fluide)."""

    def __init__(self, driver: Union[WebDriver, PageDriver], logger: Optional[ScanLogger] = None):
        self.page = driver if isinstance(driver, PageDriver) else PageDriver(driver)
        self.logger = logger
        self.pointer = PointerTracker()

        self._selector: Optional[str] = None
        self._index = 0
        self._grid: Optional[Grid] = None

        self.mouse: Optional[MouseInteractions] = None
        self.tooltips: Optional[TooltipDetector] = None
        self.sampler: Optional[ColorSampler] = None
        self.scanner: Optional[GridScanner] = None
        self.overlay: Optional[GridOverlay] = None

    # ------------------------------------------------------------------ #
    # Configuration                                                      #
    # ------------------------------------------------------------------ #

    def locator(self, selector: str) -> "CanvasGrid":
        """Sélecteur CSS du canvas (ou de son conteneur)."""
        self._selector = selector
        self._detach()
        return self

    def nth(self, index: int) -> "CanvasGrid":
        """Choisit le index-ième élément correspondant au sélecteur."""
        self._index = index
        self._detach()
        return self

    def grid_size(self, cols: int, rows: int) -> "CanvasGrid":
        self._grid = Grid(cols, rows)
        self._detach()
        return self

    def attach(self, overlay: bool = True) -> "CanvasGrid":
        """Résout le canvas, fixe la grille et construit les composants."""
        element = self._canvas()

        if self._grid is None:
            self._grid = auto_grid(self.page.bounding_box(element)) or Grid(*DEFAULT_GRID)
            print(f"[GRID] Grille automatique: {self._grid.cols}×{self._grid.rows}")

        grid = self._grid
        self.mouse = MouseInteractions(self.page, self._canvas, grid, pointer=self.pointer, logger=self.logger)
        self.tooltips = TooltipDetector(self.page)
        self.sampler = ColorSampler(self.page, self._canvas, grid)
        self.scanner = GridScanner(
            self.page, grid, self.mouse, self.tooltips, sampler=self.sampler, logger=self.logger
        )
        self.overlay = GridOverlay(self.page, self._canvas, grid)
        if overlay:
            self.overlay.attach()
        return self

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    @property
    def is_attached(self) -> bool:
        return self.scanner is not None

    def _detach(self) -> None:
        self.mouse = None
        self.tooltips = None
        self.sampler = None
        self.scanner = None
        self.overlay = None

    def _canvas(self) -> WebElement:
        # Résolu à chaque appel : le canvas peut être remplacé par l'application
        if self._selector is None:
            raise SetupError("call .locator(selector) first")
        return self.page.resolve(self._selector, self._index)

    def _require_attached(self) -> None:
        if self._selector is None:
            raise SetupError("call .locator(selector) first")
        if not self.is_attached:
            raise SetupError("call .attach() first")

    # ------------------------------------------------------------------ #
    # Géométrie et couleur                                               #
    # ------------------------------------------------------------------ #

    def get_cell_center(self, col: int, row: int) -> ScreenPoint:
        self._require_attached()
        return self.mouse.get_cell_center(col, row)

    def sample(self, col: int, row: int) -> ColorSample:
        self._require_attached()
        return self.sampler.sample(col, row)

    def sample_cell(self, col: int, row: int) -> RGBA:
        self._require_attached()
        return self.sampler.sample_cell(col, row)

    @staticmethod
    def within(actual: RGBA, expected: RGBA, tolerance: int = COLOR_TOLERANCE) -> bool:
        return within(actual, expected, tolerance)

    # ------------------------------------------------------------------ #
    # Pointeur                                                           #
    # ------------------------------------------------------------------ #

    def click_cell(self, col: int, row: int) -> None:
        self._require_attached()
        self.mouse.click_cell(col, row)

    def double_click_cell(self, col: int, row: int) -> None:
        self._require_attached()
        self.mouse.double_click_cell(col, row)

    def right_click_cell(self, col: int, row: int) -> None:
        self._require_attached()
        self.mouse.right_click_cell(col, row)

    def hover_cell(self, col: int, row: int, profile: Optional[HoverProfile] = None) -> None:
        self._require_attached()
        self.mouse.hover_cell(col, row, profile)

    def drag_from_cell_to_cell(
        self, from_col: int, from_row: int, to_col: int, to_row: int, profile: Optional[DragProfile] = None
    ) -> None:
        self._require_attached()
        self.mouse.drag_from_cell_to_cell(from_col, from_row, to_col, to_row, profile)

    def reset_pointer(self) -> None:
        """Oublie la dernière position connue du pointeur."""
        self.pointer.reset()

    def navigate(self, url: str) -> None:
        """Charge une URL ; la position du pointeur n'a plus de sens ensuite."""
        self.page.navigate(url)
        self.pointer.reset()

    # ------------------------------------------------------------------ #
    # Tooltips                                                           #
    # ------------------------------------------------------------------ #

    def hover_cell_and_capture_tooltip(
        self,
        col: int,
        row: int,
        wait_time: float = TOOLTIP_CONFIG['wait_time'],
        tooltip_selectors: Optional[Sequence[str]] = None,
        capture_screenshot: bool = False,
    ) -> TooltipCapture:
        self._require_attached()
        return self.tooltips.hover_cell_and_capture_tooltip(
            self.mouse.hover_cell,
            col,
            row,
            wait_time=wait_time,
            tooltip_selectors=tooltip_selectors,
            capture_screenshot=capture_screenshot,
        )

    def wait_for_tooltip(
        self,
        timeout: float = TOOLTIP_CONFIG['timeout'],
        tooltip_selectors: Optional[Sequence[str]] = None,
    ) -> TooltipObservation:
        self._require_attached()
        return self.tooltips.wait_for_tooltip(timeout=timeout, tooltip_selectors=tooltip_selectors)

    def get_visible_tooltips(self, tooltip_selectors: Optional[Sequence[str]] = None):
        self._require_attached()
        return self.tooltips.get_visible_tooltips(tooltip_selectors)

    # ------------------------------------------------------------------ #
    # Scans                                                              #
    # ------------------------------------------------------------------ #

    def scan_all_cells_for_tooltips(
        self,
        hover_delay: float = SCAN_CONFIG['hover_delay'],
        progress_callback=None,
        sample_colors: bool = False,
    ) -> ScanReport:
        self._require_attached()
        return self.scanner.scan_all_cells_for_tooltips(
            hover_delay=hover_delay,
            progress_callback=progress_callback,
            sample_colors=sample_colors,
        )

    def has_any_tooltips(
        self,
        max_cells_to_check: Optional[int] = None,
        hover_delay: float = SCAN_CONFIG['check_hover_delay'],
    ) -> QuickCheckResult:
        self._require_attached()
        return self.scanner.has_any_tooltips(max_cells_to_check=max_cells_to_check, hover_delay=hover_delay)

    def select_cells_and_extract_text(
        self,
        start_col: int,
        start_row: int,
        end_col: int,
        end_row: int,
        hover_delay: float = SCAN_CONFIG['region_hover_delay'],
        tooltip_selectors: Optional[Sequence[str]] = None,
        include_coordinates: bool = False,
    ) -> RegionTextResult:
        self._require_attached()
        return self.scanner.select_cells_and_extract_text(
            start_col,
            start_row,
            end_col,
            end_row,
            hover_delay=hover_delay,
            tooltip_selectors=tooltip_selectors,
            include_coordinates=include_coordinates,
        )

    def extract_cell_text(self, col: int, row: int, **kwargs) -> Optional[str]:
        self._require_attached()
        return self.scanner.extract_cell_text(col, row, **kwargs)

    def extract_row_text(self, row: int, **kwargs) -> LineTextResult:
        self._require_attached()
        return self.scanner.extract_row_text(row, **kwargs)

    def extract_column_text(self, col: int, **kwargs) -> LineTextResult:
        self._require_attached()
        return self.scanner.extract_column_text(col, **kwargs)

    # ------------------------------------------------------------------ #
    # Overlay                                                            #
    # ------------------------------------------------------------------ #

    def interactive(self, on: bool = True) -> bool:
        self._require_attached()
        return self.overlay.set_interactive(on)

    def toggle_overlay(self, show: bool) -> bool:
        self._require_attached()
        return self.overlay.toggle_visibility(show)

    def highlight_cell(
        self,
        col: int,
        row: int,
        color: str = OVERLAY_CONFIG['highlight_color'],
        duration: float = OVERLAY_CONFIG['highlight_duration'],
        thickness: int = OVERLAY_CONFIG['highlight_thickness'],
    ) -> Optional[str]:
        self._require_attached()
        return self.overlay.highlight_cell(col, row, color=color, duration=duration, thickness=thickness)
