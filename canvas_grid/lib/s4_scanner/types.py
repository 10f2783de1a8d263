"""Types pour le module s4_scanner."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from canvas_grid.lib.s0_coordinates import CellAddress, GridRegion
from canvas_grid.lib.s1_sampling import RGBA

SOURCE_TOOLTIP = "tooltip"
SOURCE_NONE = "none"


@dataclass(frozen=True)
class ScanProgress:
    """Avancement transmis au callback de progression."""
    current: int
    total: int
    address: CellAddress


@dataclass(frozen=True)
class CellScanResult:
    """Résultat d'une cellule ; `error` porte l'échec isolé de la cellule."""
    address: CellAddress
    has_tooltip: bool = False
    tooltip_text: Optional[str] = None
    color: Optional[RGBA] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "col": self.address.col,
            "row": self.address.row,
            "has_tooltip": self.has_tooltip,
            "tooltip_text": self.tooltip_text,
            "color": list(self.color) if self.color else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class ScanSummary:
    has_any_tooltips: bool
    tooltip_cells: List[CellAddress]
    dom_tooltips: int


@dataclass
class ScanReport:
    """Rapport agrégé d'un scan complet."""
    total_cells: int
    cells_with_tooltips: int
    results: List[CellScanResult]
    summary: ScanSummary
    failed_cells: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_cells": self.total_cells,
            "cells_with_tooltips": self.cells_with_tooltips,
            "failed_cells": self.failed_cells,
            "results": [r.to_dict() for r in self.results],
            "summary": {
                "has_any_tooltips": self.summary.has_any_tooltips,
                "tooltip_cells": [a.to_tuple() for a in self.summary.tooltip_cells],
                "dom_tooltips": self.summary.dom_tooltips,
            },
        }


@dataclass(frozen=True)
class QuickCheckResult:
    """Résultat de has_any_tooltips()."""
    found: bool
    first_tooltip_at: Optional[CellAddress] = None
    tooltip_text: Optional[str] = None
    cells_checked: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": self.found,
            "first_tooltip_at": self.first_tooltip_at.to_tuple() if self.first_tooltip_at else None,
            "tooltip_text": self.tooltip_text,
            "cells_checked": self.cells_checked,
        }


@dataclass(frozen=True)
class CellText:
    address: CellAddress
    text: Optional[str] = None
    html: Optional[str] = None
    source: str = SOURCE_NONE


@dataclass
class RegionTextResult:
    """Texte extrait d'une sous-région de la grille."""
    region: GridRegion
    total_cells: int
    cells_with_text: int
    cells: List[CellText] = field(default_factory=list)
    combined_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region.to_tuple(),
            "total_cells": self.total_cells,
            "cells_with_text": self.cells_with_text,
            "cells": [
                {"col": c.address.col, "row": c.address.row, "text": c.text, "source": c.source}
                for c in self.cells
            ],
            "combined_text": self.combined_text,
        }


@dataclass
class LineTextResult:
    """Texte extrait d'une ligne ou d'une colonne entière."""
    index: int
    cells: List[CellText]
    combined_text: Optional[str] = None
