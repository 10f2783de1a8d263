"""Dernière position connue du pointeur synthétique, propre à une session."""

from typing import Optional

from canvas_grid.lib.s0_coordinates import ScreenPoint

ORIGIN = ScreenPoint(0.0, 0.0)


class PointerTracker:
    """Mémorise la position du pointeur pour interpoler les survols.

    Un tracker par session/page ; reset() à chaque navigation explicite.
    """

    def __init__(self):
        self._position: Optional[ScreenPoint] = None

    def position(self) -> ScreenPoint:
        """Dernière position, l'origine si elle est inconnue."""
        return self._position or ORIGIN

    def update(self, x: float, y: float) -> None:
        self._position = ScreenPoint(float(x), float(y))

    def reset(self) -> None:
        self._position = None

    @property
    def is_known(self) -> bool:
        return self._position is not None
