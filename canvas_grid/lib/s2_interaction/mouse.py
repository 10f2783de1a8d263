"""Interactions souris sur les cellules de la grille."""

from __future__ import annotations

from typing import Callable, Optional

from selenium.webdriver.remote.webelement import WebElement

from canvas_grid.config import SCAN_CONFIG, WAIT_TIMES
from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s0_coordinates import CellAddress, Grid, ScreenPoint, cell_center

from .pointer import ORIGIN, PointerTracker
from .types import DEFAULT_HOVER, DragProfile, HoverProfile


class MouseInteractions:
    """Traduit une adresse de cellule en opérations de pointeur synthétiques."""

    def __init__(
        self,
        page: PageDriver,
        canvas: Callable[[], WebElement],
        grid: Grid,
        pointer: Optional[PointerTracker] = None,
        logger=None,
    ):
        self.page = page
        self.canvas = canvas
        self.grid = grid
        self.pointer = pointer or PointerTracker()
        self.logger = logger

    def get_cell_center(self, col: int, row: int) -> ScreenPoint:
        """Centre de la cellule ; résout et mesure le canvas avant toute action."""
        element = self.canvas()
        box = self.page.bounding_box(element)
        return cell_center(box, self.grid, CellAddress(col=col, row=row))

    # ------------------------------------------------------------------ #
    # Suivi du pointeur (best-effort)                                    #
    # ------------------------------------------------------------------ #

    def _last_position(self) -> ScreenPoint:
        try:
            return self.pointer.position()
        except Exception:
            return ORIGIN

    def _remember(self, x: float, y: float) -> None:
        try:
            self.pointer.update(x, y)
        except Exception:
            pass

    def _log(self, action: str, address: tuple, success: bool = True, error: Optional[str] = None) -> None:
        if self.logger is None:
            return
        try:
            self.logger.log_action(action, address, success=success, error=error)
        except Exception as e:
            print(f"[MOUSE] Journalisation de l'action {action} impossible: {e}")

    # ------------------------------------------------------------------ #
    # Clics                                                              #
    # ------------------------------------------------------------------ #

    def click_cell(self, col: int, row: int) -> None:
        """Clique au centre d'une cellule."""
        target = self.get_cell_center(col, row)
        self.page.mouse_click(target.x, target.y)
        self._remember(target.x, target.y)
        self._log("click", (col, row))

    def double_click_cell(self, col: int, row: int) -> None:
        """Double-clique au centre d'une cellule."""
        target = self.get_cell_center(col, row)
        self.page.mouse_double_click(target.x, target.y)
        self._remember(target.x, target.y)
        self._log("double_click", (col, row))

    def right_click_cell(self, col: int, row: int) -> None:
        """Clic droit au centre d'une cellule."""
        target = self.get_cell_center(col, row)
        self.page.mouse_click(target.x, target.y, button="right")
        self._remember(target.x, target.y)
        self._log("right_click", (col, row))

    # ------------------------------------------------------------------ #
    # Survol                                                             #
    # ------------------------------------------------------------------ #

    def hover_cell(self, col: int, row: int, profile: Optional[HoverProfile] = None) -> None:
        """Survole le centre d'une cellule avec un mouvement réaliste.

        Les canvas ignorent souvent un pointeur téléporté : on interpole
        depuis la dernière position connue, puis un léger jitter (aller-retour)
        redéclenche les listeners qui ignorent une ré-entrée sur le même pixel.
        """
        profile = profile or DEFAULT_HOVER
        target = self.get_cell_center(col, row)
        start = self._last_position()

        if profile.move_steps > 1:
            for i in range(1, profile.move_steps + 1):
                step_x = start.x + (target.x - start.x) * i / profile.move_steps
                step_y = start.y + (target.y - start.y) * i / profile.move_steps
                self.page.mouse_move(step_x, step_y)
                self.page.wait(profile.step_pause)

        self.page.mouse_move(target.x, target.y)

        if profile.jitter > 0:
            self.page.wait(profile.jitter_before)
            self.page.mouse_move(target.x + profile.jitter, target.y)
            self.page.wait(profile.jitter_after)
            self.page.mouse_move(target.x, target.y)

        if profile.dwell > 0:
            self.page.wait(profile.dwell)

        self._remember(target.x, target.y)
        self._log("hover", (col, row))

    # ------------------------------------------------------------------ #
    # Glisser-déposer                                                    #
    # ------------------------------------------------------------------ #

    def drag_from_cell_to_cell(
        self,
        from_col: int,
        from_row: int,
        to_col: int,
        to_row: int,
        profile: Optional[DragProfile] = None,
    ) -> None:
        """Glisse d'une cellule à une autre."""
        profile = profile or DragProfile()
        source = self.get_cell_center(from_col, from_row)
        destination = self.get_cell_center(to_col, to_row)

        self.page.mouse_move(source.x, source.y)
        self.page.wait(profile.settle)
        self.page.mouse_down()
        self.page.wait(profile.settle)

        for i in range(1, profile.steps + 1):
            step_x = source.x + (destination.x - source.x) * i / profile.steps
            step_y = source.y + (destination.y - source.y) * i / profile.steps
            self.page.mouse_move(step_x, step_y)
            self.page.wait(profile.step_pause)

        self.page.mouse_move(destination.x, destination.y)
        self.page.wait(profile.settle)
        self.page.mouse_up()

        self._remember(destination.x, destination.y)
        self._log("drag", (from_col, from_row, to_col, to_row))

    def move_to_neutral(self, pause: float = WAIT_TIMES['clear_hover']) -> None:
        """Écarte le pointeur pour effacer les états de survol (best-effort)."""
        x, y = SCAN_CONFIG['neutral_position']
        try:
            self.page.mouse_move(x, y)
            self._remember(x, y)
            self.page.wait(pause)
        except Exception as e:
            print(f"[MOUSE] Impossible d'écarter le pointeur: {e}")
