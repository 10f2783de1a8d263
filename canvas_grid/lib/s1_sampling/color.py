"""Moyenne et comparaison de couleurs RGBA."""

from typing import Iterable, Sequence

import numpy as np

from canvas_grid.config import COLOR_TOLERANCE

from .types import RGBA


def average_rgba(pixels: Iterable[Sequence[int]]) -> RGBA:
    """Moyenne par canal, arrondie à l'entier le plus proche (demi vers le haut).

    Politique commune aux deux paliers pour que leurs résultats soient comparables.
    """
    values = np.asarray(list(pixels), dtype=np.float64)
    if values.size == 0:
        raise ValueError("Aucun pixel à moyenner.")
    values = values.reshape(-1, 4)
    means = np.floor(values.mean(axis=0) + 0.5)
    r, g, b, a = (int(np.clip(v, 0, 255)) for v in means)
    return (r, g, b, a)


def within(actual: Sequence[int], expected: Sequence[int], tolerance: int = COLOR_TOLERANCE) -> bool:
    """True si chaque canal diffère d'au plus `tolerance`."""
    if len(actual) != 4 or len(expected) != 4:
        raise ValueError("RGBA attendu (4 canaux).")
    return all(abs(int(a) - int(e)) <= tolerance for a, e in zip(actual, expected))
