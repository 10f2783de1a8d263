"""Détection des tooltips DOM apparus après une interaction."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from selenium.common.exceptions import TimeoutException, WebDriverException

from canvas_grid.config import TOOLTIP_CONFIG
from canvas_grid.errors import TooltipTimeout
from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s2_interaction.types import TOOLTIP_HOVER, HoverProfile

from .types import TooltipCapture, TooltipObservation

HoverFn = Callable[[int, int, Optional[HoverProfile]], None]

DEFAULT_TOOLTIP_SELECTORS = tuple(TOOLTIP_CONFIG['selectors'])


class TooltipDetector:
    """Sonde une liste ordonnée de sélecteurs pour trouver un tooltip visible.

    Une erreur sur un sélecteur (sélecteur invalide, DOM muté entre deux
    appels) vaut « pas de correspondance » pour ce sélecteur uniquement.
    """

    def __init__(self, page: PageDriver, selectors: Optional[Sequence[str]] = None):
        self.page = page
        self.selectors = tuple(selectors or DEFAULT_TOOLTIP_SELECTORS)

    def _selectors(self, override: Optional[Sequence[str]]) -> Sequence[str]:
        return tuple(override) if override else self.selectors

    def _observe(self, selector: str, index: int, element) -> TooltipObservation:
        return TooltipObservation(
            selector=selector,
            index=index,
            text=self.page.text_content(element),
            html=self.page.inner_html(element),
            bounding_box=self.page.bounding_box(element),
        )

    def hover_cell_and_capture_tooltip(
        self,
        hover_fn: HoverFn,
        col: int,
        row: int,
        wait_time: float = TOOLTIP_CONFIG['wait_time'],
        tooltip_selectors: Optional[Sequence[str]] = None,
        capture_screenshot: bool = False,
    ) -> TooltipCapture:
        """Survole une cellule puis capture le premier tooltip visible."""
        hover_fn(col, row, TOOLTIP_HOVER)
        self.page.wait(wait_time)

        capture = TooltipCapture(visible=False)
        for selector in self._selectors(tooltip_selectors):
            try:
                elements = self.page.find_all(selector)
                if not elements or not self.page.is_visible(elements[0]):
                    continue
                first = elements[0]
                capture = TooltipCapture(
                    visible=True,
                    selector=selector,
                    text=self.page.text_content(first),
                    html=self.page.inner_html(first),
                )
                break
            except WebDriverException:
                continue

        if capture_screenshot and capture.visible:
            capture = TooltipCapture(
                visible=True,
                selector=capture.selector,
                text=capture.text,
                html=capture.html,
                screenshot=self.page.screenshot_base64(),
            )
        return capture

    def wait_for_tooltip(
        self,
        timeout: float = TOOLTIP_CONFIG['timeout'],
        tooltip_selectors: Optional[Sequence[str]] = None,
    ) -> TooltipObservation:
        """Attend qu'un tooltip devienne visible ; le budget est réparti entre les sélecteurs."""
        selectors = self._selectors(tooltip_selectors)
        per_selector = timeout / len(selectors)

        for selector in selectors:
            try:
                element = self.page.wait_for_visible(selector, per_selector)
                return self._observe(selector, 0, element)
            except (TimeoutException, WebDriverException):
                continue

        raise TooltipTimeout(selectors, timeout)

    def get_visible_tooltips(self, tooltip_selectors: Optional[Sequence[str]] = None) -> List[TooltipObservation]:
        """Tous les tooltips visibles, tous sélecteurs confondus."""
        tooltips: List[TooltipObservation] = []
        for selector in self._selectors(tooltip_selectors):
            try:
                found = []
                for index, element in enumerate(self.page.find_all(selector)):
                    if self.page.is_visible(element):
                        found.append(self._observe(selector, index, element))
            except WebDriverException:
                continue
            tooltips.extend(found)
        return tooltips
