"""Module s4_scanner : Scans de la grille."""

from .types import (
    ScanProgress,
    CellScanResult,
    ScanSummary,
    ScanReport,
    QuickCheckResult,
    CellText,
    RegionTextResult,
    LineTextResult,
    SOURCE_TOOLTIP,
    SOURCE_NONE,
)
from .scanner import GridScanner

__all__ = [
    "GridScanner",
    "ScanProgress",
    "CellScanResult",
    "ScanSummary",
    "ScanReport",
    "QuickCheckResult",
    "CellText",
    "RegionTextResult",
    "LineTextResult",
    "SOURCE_TOOLTIP",
    "SOURCE_NONE",
]
