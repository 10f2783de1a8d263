"""Adaptateur Selenium : primitives de page utilisées par le coeur de la librairie.

Localisation d'éléments, mesure des bounding boxes, captures d'écran
découpées, pointeur synthétique (actions W3C) et évaluation de scripts.
"""

import base64
import io
import time
from typing import Any, List, Optional

from PIL import Image
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from canvas_grid.errors import CanvasNotFound, SamplingError
from canvas_grid.lib.s0_coordinates.types import BoundingBox, CellRect


class PageDriver:
    """Primitives de page au-dessus d'un WebDriver."""

    RECT_SCRIPT = """
    const el = arguments[0];
    const rect = el.getBoundingClientRect();
    return { x: rect.left, y: rect.top, width: rect.width, height: rect.height };
    """

    def __init__(self, driver: WebDriver = None):
        self.driver = driver

    def _require_driver(self) -> WebDriver:
        if not self.driver:
            raise RuntimeError("Driver non initialisé pour PageDriver")
        return self.driver

    # ------------------------------------------------------------------ #
    # Éléments                                                           #
    # ------------------------------------------------------------------ #

    def find_all(self, selector: str) -> List[WebElement]:
        """Retourne tous les éléments correspondant au sélecteur CSS."""
        return self._require_driver().find_elements(By.CSS_SELECTOR, selector)

    def resolve(self, selector: str, index: int = 0) -> WebElement:
        """Résout le index-ième élément correspondant au sélecteur."""
        elements = self.find_all(selector)
        if index < 0 or index >= len(elements):
            raise CanvasNotFound(selector, index)
        return elements[index]

    def bounding_box(self, element: WebElement) -> Optional[BoundingBox]:
        """Mesure la bounding box (None si l'élément est détaché ou sans surface)."""
        try:
            rect = self._require_driver().execute_script(self.RECT_SCRIPT, element)
        except StaleElementReferenceException:
            return None
        box = BoundingBox.from_rect(rect)
        if box is None or box.is_empty:
            return None
        return box

    def is_visible(self, element: WebElement) -> bool:
        return element.is_displayed()

    def text_content(self, element: WebElement) -> Optional[str]:
        return element.get_property("textContent") or None

    def inner_html(self, element: WebElement) -> Optional[str]:
        return element.get_property("innerHTML") or None

    def wait_for_visible(self, selector: str, timeout: float) -> WebElement:
        """Attend qu'un élément devienne visible (TimeoutException sinon)."""
        return WebDriverWait(self._require_driver(), timeout).until(
            EC.visibility_of_element_located((By.CSS_SELECTOR, selector))
        )

    # ------------------------------------------------------------------ #
    # Scripts                                                            #
    # ------------------------------------------------------------------ #

    def evaluate(self, script: str, *args) -> Any:
        return self._require_driver().execute_script(script, *args)

    def evaluate_async(self, script: str, *args, timeout: Optional[float] = None) -> Any:
        """Exécute un script asynchrone (callback = dernier argument)."""
        driver = self._require_driver()
        if timeout is None:
            return driver.execute_async_script(script, *args)

        # le timeout de script est global au driver : on rend celui de l'appelant
        previous = driver.timeouts.script
        driver.set_script_timeout(timeout)
        try:
            return driver.execute_async_script(script, *args)
        finally:
            driver.set_script_timeout(previous)

    # ------------------------------------------------------------------ #
    # Captures                                                           #
    # ------------------------------------------------------------------ #

    def device_pixel_ratio(self) -> float:
        ratio = self.evaluate("return window.devicePixelRatio || 1;")
        try:
            return float(ratio) or 1.0
        except (TypeError, ValueError):
            return 1.0

    def scroll_into_view(self, element: WebElement) -> None:
        """Amène l'élément dans le viewport (défilement minimal)."""
        self._require_driver().execute_script(
            "arguments[0].scrollIntoView({block: 'nearest', inline: 'nearest'});", element
        )

    def capture_region(self, clip: CellRect) -> bytes:
        """Capture PNG d'une zone du viewport (coordonnées CSS)."""
        png = self._require_driver().get_screenshot_as_png()
        image = Image.open(io.BytesIO(png)).convert("RGBA")
        ratio = self.device_pixel_ratio()

        left = int(round(clip.x * ratio))
        top = int(round(clip.y * ratio))
        right = max(left + 1, int(round((clip.x + clip.width) * ratio)))
        bottom = max(top + 1, int(round((clip.y + clip.height) * ratio)))

        # crop() complète hors image avec du noir transparent : une zone hors viewport doit échouer
        width, height = image.size
        if left < 0 or top < 0 or right > width or bottom > height:
            raise SamplingError(
                f"Zone ({left}, {top}, {right}, {bottom}) hors du viewport capturé ({width}×{height})"
            )
        cropped = image.crop((left, top, right, bottom))

        buffer = io.BytesIO()
        cropped.save(buffer, format="PNG")
        return buffer.getvalue()

    def screenshot_base64(self) -> str:
        png = self._require_driver().get_screenshot_as_png()
        return base64.b64encode(png).decode("ascii")

    # ------------------------------------------------------------------ #
    # Pointeur                                                           #
    # ------------------------------------------------------------------ #

    def _chain(self) -> ActionChains:
        # duration=0 : déplacements instantanés, l'interpolation est gérée côté Python
        return ActionChains(self._require_driver(), duration=0)

    def _chain_at(self, x: float, y: float) -> ActionChains:
        actions = self._chain()
        actions.w3c_actions.pointer_action.move_to_location(int(round(x)), int(round(y)))
        return actions

    def mouse_move(self, x: float, y: float) -> None:
        self._chain_at(x, y).perform()

    def mouse_click(self, x: float, y: float, button: str = "left") -> None:
        actions = self._chain_at(x, y)
        if button == "right":
            actions.context_click()
        else:
            actions.click()
        actions.perform()

    def mouse_double_click(self, x: float, y: float) -> None:
        self._chain_at(x, y).double_click().perform()

    def mouse_down(self) -> None:
        self._chain().click_and_hold().perform()

    def mouse_up(self) -> None:
        self._chain().release().perform()

    # ------------------------------------------------------------------ #
    # Navigation / attente                                               #
    # ------------------------------------------------------------------ #

    def navigate(self, url: str) -> None:
        self._require_driver().get(url)

    @staticmethod
    def wait(seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
