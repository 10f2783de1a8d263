"""Module s0_browser : Gestion du navigateur Selenium."""

from .browser import BrowserManager, navigate_to
from .types import BrowserConfig, BrowserHandle
from .page import PageDriver

__all__ = [
    "BrowserManager",
    "BrowserConfig",
    "BrowserHandle",
    "navigate_to",
    "PageDriver",
]
