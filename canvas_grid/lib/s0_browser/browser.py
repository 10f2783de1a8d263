"""Gestion du navigateur Selenium."""

from typing import Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from .types import BrowserConfig, BrowserHandle


class BrowserManager:
    """Gestionnaire du navigateur web."""

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self.handle: Optional[BrowserHandle] = None

    def build_options(self) -> Options:
        """Construit les options Chrome à partir de la configuration."""
        options = Options()
        width, height = self.config.window_size

        if self.config.headless:
            options.add_argument("--headless=new")
        options.add_argument(f"--window-size={width},{height}")
        # Lecture des pixels WebGL après composition
        options.add_argument("--enable-unsafe-swiftshader")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")

        if self.config.user_agent:
            options.add_argument(f"user-agent={self.config.user_agent}")
        return options

    def start(self) -> BrowserHandle:
        """Démarre le navigateur Chrome."""
        try:
            options = self.build_options()
            print("[BROWSER] Installation du pilote Chrome...")
            service = Service(ChromeDriverManager().install())

            print("[BROWSER] Démarrage de Chrome...")
            driver = webdriver.Chrome(service=service, options=options)
            driver.set_page_load_timeout(self.config.page_load_timeout)

            print("[BROWSER] Navigateur démarré")
            self.handle = BrowserHandle(driver=driver, is_started=True)
            return self.handle

        except WebDriverException as e:
            print(f"[ERREUR] Erreur lors du démarrage du navigateur: {e}")
            raise

    def stop(self) -> None:
        """Arrête le navigateur proprement."""
        if self.handle and self.handle.driver:
            self.handle.close()
            print("[FIN] Navigateur arrêté")


def navigate_to(handle: BrowserHandle, url: str, timeout: int = 10) -> bool:
    """Navigue vers une URL et attend le body."""
    if not handle or not handle.is_started:
        print("[ERREUR] Navigateur non démarré")
        return False

    try:
        print(f"[NAVIGATION] Navigation vers: {url}")
        handle.driver.get(url)
        WebDriverWait(handle.driver, timeout).until(
            EC.presence_of_element_located((By.TAG_NAME, "body"))
        )
        print("[SUCCES] Page chargée")
        return True

    except TimeoutException:
        print("[ERREUR] Timeout lors du chargement de la page")
    except WebDriverException as e:
        print(f"[ERREUR] Erreur lors de la navigation: {e}")
    return False
