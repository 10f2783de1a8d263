"""Types pour le module s0_browser."""

from dataclasses import dataclass
from typing import Optional, Tuple

from selenium.webdriver.remote.webdriver import WebDriver

from canvas_grid.config import BROWSER_CONFIG


@dataclass
class BrowserConfig:
    """Configuration du navigateur."""
    headless: bool = BROWSER_CONFIG['headless']
    window_size: Tuple[int, int] = BROWSER_CONFIG['window_size']
    user_agent: Optional[str] = None
    page_load_timeout: int = BROWSER_CONFIG['page_load_timeout']


@dataclass
class BrowserHandle:
    """Handle vers un navigateur actif."""
    driver: WebDriver
    is_started: bool = True

    def close(self) -> None:
        """Ferme le navigateur."""
        if self.driver:
            self.driver.quit()
            self.is_started = False
