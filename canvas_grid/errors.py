"""Exceptions de canvas-grid."""

from typing import Optional, Sequence


class CanvasGridError(RuntimeError):
    """Erreur de base de la librairie."""


class SetupError(CanvasGridError):
    """Configuration incomplète : locator absent, session non attachée..."""


class CanvasNotFound(SetupError):
    """Le canvas ne peut pas être résolu en élément vivant."""

    def __init__(self, selector: Optional[str] = None, index: int = 0, message: Optional[str] = None):
        self.selector = selector
        self.index = index
        if message is None:
            if selector is None:
                message = "canvas not found"
            else:
                message = f'no elements match "{selector}" at index {index}'
        super().__init__(message)


class GeometryError(CanvasGridError):
    """Erreur de géométrie pour l'opération demandée (non réessayée)."""


class MissingBoundingBox(GeometryError):
    """Pas de bounding box (élément caché ou pas encore mis en page)."""

    def __init__(self, message: str = "no canvas bbox"):
        super().__init__(message)


class SamplingSoftFailure(CanvasGridError):
    """Échec d'un palier d'échantillonnage ; le palier suivant prend le relais."""


class SamplingError(CanvasGridError):
    """Tous les paliers d'échantillonnage ont échoué."""


class TooltipTimeout(CanvasGridError):
    """Aucun tooltip visible dans le budget de temps imparti."""

    def __init__(self, selectors: Sequence[str], timeout: float):
        self.selectors = list(selectors)
        self.timeout = timeout
        super().__init__(
            f"No tooltip found within {timeout:g}s using selectors: {', '.join(self.selectors)}"
        )
