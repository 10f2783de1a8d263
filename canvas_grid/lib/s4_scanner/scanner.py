"""Parcours des cellules : survol + détection, avec isolation des échecs par cellule."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from canvas_grid.config import SCAN_CONFIG, WAIT_TIMES
from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s0_coordinates import (
    CellAddress,
    Grid,
    iter_cells,
    normalize_region,
    spread_cells,
)
from canvas_grid.lib.s1_sampling import ColorSampler
from canvas_grid.lib.s2_interaction import SCAN_HOVER, MouseInteractions
from canvas_grid.lib.s3_tooltip import TooltipDetector

from .types import (
    SOURCE_NONE,
    SOURCE_TOOLTIP,
    CellScanResult,
    CellText,
    LineTextResult,
    QuickCheckResult,
    RegionTextResult,
    ScanProgress,
    ScanReport,
    ScanSummary,
)

ProgressCallback = Callable[[ScanProgress], None]


class GridScanner:
    """Orchestre survol et détection sur toute la grille ou un sous-ensemble.

    Les cellules sont toujours visitées en row-major (ligne externe, colonne
    interne). Les erreurs de mise en place (canvas introuvable, pas de
    bounding box) sont levées avant la boucle ; dans la boucle, l'échec
    d'une cellule est enregistré sur son résultat et le scan continue.
    """

    def __init__(
        self,
        page: PageDriver,
        grid: Grid,
        mouse: MouseInteractions,
        tooltips: TooltipDetector,
        sampler: Optional[ColorSampler] = None,
        logger=None,
    ):
        self.page = page
        self.grid = grid
        self.mouse = mouse
        self.tooltips = tooltips
        self.sampler = sampler
        self.logger = logger

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _preflight(self) -> None:
        """Résout et mesure le canvas ; lève SetupError / MissingBoundingBox."""
        self.mouse.get_cell_center(0, 0)

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], progress: ScanProgress) -> None:
        if callback is None:
            return
        try:
            callback(progress)
        except Exception as e:
            print(f"[SCAN] Callback de progression en erreur (ignoré): {e}")

    def _log_cell(self, result: CellScanResult) -> None:
        if self.logger is None:
            return
        try:
            self.logger.log_cell(result)
        except Exception as e:
            print(f"[SCAN] Journalisation de la cellule ({result.address.col}, {result.address.row}) impossible: {e}")

    def _inspect_cell(self, address: CellAddress, hover_delay: float, sample_colors: bool) -> CellScanResult:
        """PENDING → HOVER → DETECT, puis le résultat est figé."""
        try:
            self.mouse.hover_cell(address.col, address.row, SCAN_HOVER)
            self.page.wait(hover_delay)
            tooltips = self.tooltips.get_visible_tooltips()
        except Exception as e:
            return CellScanResult(address=address, error=f"{type(e).__name__}: {e}")

        color = None
        error = None
        if sample_colors and self.sampler is not None:
            try:
                color = self.sampler.sample_cell(address.col, address.row)
            except Exception as e:
                error = f"{type(e).__name__}: {e}"

        return CellScanResult(
            address=address,
            has_tooltip=bool(tooltips),
            tooltip_text=tooltips[0].text if tooltips else None,
            color=color,
            error=error,
        )

    @staticmethod
    def _build_report(results: List[CellScanResult]) -> ScanReport:
        tooltip_results = [r for r in results if r.has_tooltip]
        return ScanReport(
            total_cells=len(results),
            cells_with_tooltips=len(tooltip_results),
            results=results,
            summary=ScanSummary(
                has_any_tooltips=bool(tooltip_results),
                tooltip_cells=[r.address for r in tooltip_results],
                dom_tooltips=sum(1 for r in tooltip_results if r.tooltip_text),
            ),
            failed_cells=sum(1 for r in results if not r.ok),
        )

    # ------------------------------------------------------------------ #
    # Scans                                                              #
    # ------------------------------------------------------------------ #

    def scan_all_cells_for_tooltips(
        self,
        hover_delay: float = SCAN_CONFIG['hover_delay'],
        progress_callback: Optional[ProgressCallback] = None,
        sample_colors: bool = False,
    ) -> ScanReport:
        """Survole chaque cellule et relève les tooltips DOM visibles."""
        self._preflight()

        total = self.grid.cell_count
        print(f"[SCAN] Scan complet: {self.grid.cols}×{self.grid.rows} ({total} cellules)")

        results: List[CellScanResult] = []
        for current, address in enumerate(iter_cells(self.grid), start=1):
            self._notify(progress_callback, ScanProgress(current=current, total=total, address=address))
            result = self._inspect_cell(address, hover_delay, sample_colors)
            results.append(result)
            self._log_cell(result)
            self.page.wait(WAIT_TIMES['between_cells'])

        self.mouse.move_to_neutral()

        report = self._build_report(results)
        print(
            f"[SCAN] Terminé: {report.cells_with_tooltips}/{report.total_cells} cellules avec tooltip"
            f" ({report.failed_cells} en échec)"
        )
        return report

    def has_any_tooltips(
        self,
        max_cells_to_check: Optional[int] = None,
        hover_delay: float = SCAN_CONFIG['check_hover_delay'],
    ) -> QuickCheckResult:
        """Sonde un échantillon réparti de cellules et s'arrête au premier tooltip."""
        if max_cells_to_check is None:
            max_cells_to_check = min(SCAN_CONFIG['check_max_cells'], self.grid.cell_count)
        self._preflight()

        checked = 0
        for address in spread_cells(self.grid, max_cells_to_check):
            checked += 1
            try:
                self.mouse.hover_cell(address.col, address.row, SCAN_HOVER)
                self.page.wait(hover_delay)
                tooltips = self.tooltips.get_visible_tooltips()
            except Exception:
                continue
            if tooltips:
                return QuickCheckResult(
                    found=True,
                    first_tooltip_at=address,
                    tooltip_text=tooltips[0].text,
                    cells_checked=checked,
                )

        self.mouse.move_to_neutral(pause=0)
        return QuickCheckResult(found=False, cells_checked=checked)

    # ------------------------------------------------------------------ #
    # Extraction de texte                                                #
    # ------------------------------------------------------------------ #

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
        """Survole une sous-région et concatène le texte des tooltips trouvés."""
        region = normalize_region(self.grid, start_col, start_row, end_col, end_row)
        self._preflight()

        cells: List[CellText] = []
        for address in iter_cells(self.grid, region):
            col, row = address
            cell = CellText(address=address)
            try:
                capture = self.tooltips.hover_cell_and_capture_tooltip(
                    self.mouse.hover_cell,
                    col,
                    row,
                    wait_time=hover_delay,
                    tooltip_selectors=tooltip_selectors,
                )
                if capture.visible and capture.text:
                    text = capture.text
                    if include_coordinates:
                        text = f"({col},{row}): {text}"
                    cell = CellText(address=address, text=text, html=capture.html, source=SOURCE_TOOLTIP)
            except Exception as e:
                print(f"[SCAN] Extraction impossible pour la cellule ({col}, {row}): {e}")

            cells.append(cell)
            self.page.wait(WAIT_TIMES['between_region_cells'])

        texts = [c.text.strip() for c in cells if c.text and c.text.strip()]
        combined = SCAN_CONFIG['text_delimiter'].join(texts) if texts else None

        self.mouse.move_to_neutral()

        return RegionTextResult(
            region=region,
            total_cells=region.cell_count,
            cells_with_text=sum(1 for c in cells if c.source != SOURCE_NONE),
            cells=cells,
            combined_text=combined,
        )

    def extract_cell_text(
        self,
        col: int,
        row: int,
        hover_delay: float = SCAN_CONFIG['region_hover_delay'],
        tooltip_selectors: Optional[Sequence[str]] = None,
    ) -> Optional[str]:
        """Texte du tooltip d'une seule cellule, None s'il n'y en a pas."""
        result = self.select_cells_and_extract_text(
            col, row, col, row,
            hover_delay=hover_delay,
            tooltip_selectors=tooltip_selectors,
        )
        return result.cells[0].text if result.cells else None

    def extract_row_text(
        self,
        row: int,
        hover_delay: float = SCAN_CONFIG['region_hover_delay'],
        tooltip_selectors: Optional[Sequence[str]] = None,
        include_coordinates: bool = False,
    ) -> LineTextResult:
        result = self.select_cells_and_extract_text(
            0, row, self.grid.cols - 1, row,
            hover_delay=hover_delay,
            tooltip_selectors=tooltip_selectors,
            include_coordinates=include_coordinates,
        )
        return LineTextResult(index=row, cells=result.cells, combined_text=result.combined_text)

    def extract_column_text(
        self,
        col: int,
        hover_delay: float = SCAN_CONFIG['region_hover_delay'],
        tooltip_selectors: Optional[Sequence[str]] = None,
        include_coordinates: bool = False,
    ) -> LineTextResult:
        result = self.select_cells_and_extract_text(
            col, 0, col, self.grid.rows - 1,
            hover_delay=hover_delay,
            tooltip_selectors=tooltip_selectors,
            include_coordinates=include_coordinates,
        )
        return LineTextResult(index=col, cells=result.cells, combined_text=result.combined_text)
