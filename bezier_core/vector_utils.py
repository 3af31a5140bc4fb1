#!/usr/bin/env python3
"""
Vector helpers for 2D operations.

Vector2D is a small immutable value type used for every position, velocity and
tangent in the app. Operations return new vectors and never mutate.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .constants import NORMALIZE_EPSILON


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


@dataclass(frozen=True)
class Vector2D:
    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Vector2D":
        return Vector2D(self.x * k, self.y * k)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2D":
        """Unit vector in the same direction, or (0, 0) for a (near) zero vector."""
        mag = self.magnitude()
        if mag < NORMALIZE_EPSILON:
            return Vector2D(0.0, 0.0)
        return Vector2D(self.x / mag, self.y / mag)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ZERO = Vector2D(0.0, 0.0)
