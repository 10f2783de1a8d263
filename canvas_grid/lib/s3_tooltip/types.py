"""Types pour le module s3_tooltip."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from canvas_grid.lib.s0_coordinates import BoundingBox


@dataclass(frozen=True)
class TooltipObservation:
    """Élément tooltip visible au moment du sondage (pas d'identité entre deux sondages)."""
    selector: str
    index: int = 0
    text: Optional[str] = None
    html: Optional[str] = None
    bounding_box: Optional[BoundingBox] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selector": self.selector,
            "index": self.index,
            "text": self.text,
            "html": self.html,
            "bounding_box": self.bounding_box.to_dict() if self.bounding_box else None,
        }


@dataclass(frozen=True)
class TooltipCapture:
    """Résultat d'un survol suivi d'une recherche de tooltip."""
    visible: bool
    selector: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None
    screenshot: Optional[str] = None  # PNG base64 du viewport
