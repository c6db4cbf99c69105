# src/ogrlayer/vector/envelope.py

"""
This module defines the axis-aligned bounding box returned by extent queries.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

__all__ = [
    "Envelope"
]

@dataclass(frozen=True)
class Envelope:
    """
    Axis-aligned bounding box, in the engine's (min_x, max_x, min_y, max_y) order.

    Args:
        min_x: Minimum x coordinate
        max_x: Maximum x coordinate
        min_y: Minimum y coordinate
        max_y: Maximum y coordinate
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_ogr(cls, extent: Sequence[float]) -> "Envelope":
        """Builds an Envelope from the 4-tuple returned by the engine."""
        min_x, max_x, min_y, max_y = (float(v) for v in extent)
        return cls(min_x, max_x, min_y, max_y)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Shapely/GeoPandas ordering: (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, other: "Envelope") -> bool:
        return (
            self.min_x <= other.min_x and other.max_x <= self.max_x
            and self.min_y <= other.min_y and other.max_y <= self.max_y
        )
