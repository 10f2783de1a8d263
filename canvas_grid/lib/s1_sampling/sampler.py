"""Échantillonnage de la couleur d'une cellule."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from selenium.webdriver.remote.webelement import WebElement

from canvas_grid.config import COLOR_TOLERANCE
from canvas_grid.errors import SamplingError, SamplingSoftFailure
from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s0_coordinates import CellAddress, Grid

from .color import within as _within
from .strategies import DirectPixelRead, RegionCapture
from .types import RGBA, ColorSample


class ColorSampler:
    """Couleur moyenne d'une cellule via une suite ordonnée de paliers.

    Le premier palier qui réussit court-circuite les suivants. Un palier
    signale un échec récupérable par SamplingSoftFailure ; toute autre
    exception remonte à l'appelant.
    """

    def __init__(
        self,
        page: PageDriver,
        canvas: Callable[[], WebElement],
        grid: Grid,
        strategies: Optional[Sequence] = None,
    ):
        self.page = page
        self.canvas = canvas
        self.grid = grid
        self.strategies = tuple(strategies) if strategies else (
            DirectPixelRead(page),
            RegionCapture(page),
        )

    def sample(self, col: int, row: int) -> ColorSample:
        """Retourne la couleur et le palier qui l'a produite."""
        element = self.canvas()
        address = CellAddress(col=col, row=row)

        failures = []
        for strategy in self.strategies:
            try:
                rgba = strategy.read(element, self.grid, address)
            except SamplingSoftFailure as e:
                failures.append(f"{strategy.name}: {e}")
                continue
            return ColorSample(rgba=rgba, tier=strategy.name)

        raise SamplingError(
            f"Aucun palier n'a pu échantillonner ({col}, {row}): {'; '.join(failures)}"
        )

    def sample_cell(self, col: int, row: int) -> RGBA:
        """Lit la couleur RGBA moyenne d'une cellule."""
        return self.sample(col, row).rgba

    @staticmethod
    def within(actual: RGBA, expected: RGBA, tolerance: int = COLOR_TOLERANCE) -> bool:
        """Comparaison par canal avec tolérance."""
        return _within(actual, expected, tolerance)
