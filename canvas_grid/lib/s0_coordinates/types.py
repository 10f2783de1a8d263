"""Types pour le module s0_coordinates."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Grid:
    """Dimensions de la grille (cols, rows), toutes deux > 0."""
    cols: int
    rows: int

    def __post_init__(self):
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"Grille invalide ({self.cols}×{self.rows}) : cols et rows doivent être > 0.")

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    def to_tuple(self) -> Tuple[int, int]:
        return (self.cols, self.rows)


@dataclass(frozen=True)
class CellAddress:
    """Adresse d'une cellule (col, row), base 0."""
    col: int
    row: int

    def __iter__(self):
        return iter((self.col, self.row))

    def to_tuple(self) -> Tuple[int, int]:
        return (self.col, self.row)


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle d'un élément en pixels CSS du viewport."""
    x: float
    y: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def from_rect(cls, rect: Optional[Dict[str, Any]]) -> Optional["BoundingBox"]:
        """Construit une box depuis un dict getBoundingClientRect()."""
        if not rect:
            return None
        x = rect.get("x", rect.get("left", 0))
        y = rect.get("y", rect.get("top", 0))
        return cls(float(x), float(y), float(rect["width"]), float(rect["height"]))

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class ScreenPoint:
    """Point en coordonnées viewport (pixels CSS)."""
    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class CellRect:
    """Rectangle d'une cellule ; les cellules pavent exactement la bounding box."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class GridRegion:
    """Sous-région rectangulaire normalisée (bornes incluses)."""
    start_col: int
    start_row: int
    end_col: int
    end_row: int

    @property
    def width(self) -> int:
        return self.end_col - self.start_col + 1

    @property
    def height(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, address: CellAddress) -> bool:
        return (self.start_col <= address.col <= self.end_col and
                self.start_row <= address.row <= self.end_row)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.start_col, self.start_row, self.end_col, self.end_row)
