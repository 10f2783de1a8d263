"""Types pour le module s1_sampling."""

from dataclasses import dataclass
from typing import Tuple

# (r, g, b, a), chaque canal dans [0, 255]
RGBA = Tuple[int, int, int, int]

TIER_DIRECT = "direct"
TIER_CAPTURE = "capture"


@dataclass(frozen=True)
class ColorSample:
    """Couleur moyenne d'une cellule et palier qui l'a produite."""
    rgba: RGBA
    tier: str
