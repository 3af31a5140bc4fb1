#!/usr/bin/env python3
"""
Cubic Bezier segment over four physics-driven control points.

Mathematical form
    B(t)  = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3
    B'(t) = 3(1-t)^2 (P1-P0) + 6(1-t) t (P2-P1) + 3 t^2 (P3-P2)

t is the curve parameter in [0, 1], not arc length. Both formulas are evaluated on the
control points' current positions, so results change every frame as the points move.
The derivative is the exact analytic one; no finite differences.
"""
from typing import Iterator, Optional, Set, Tuple

from .data_models import PhysicsPoint, TangentSample
from .vector_utils import Vector2D


def bernstein_weights(t: float) -> Tuple[float, float, float, float]:
    """
    Cubic Bernstein basis at t.

    On [0, 1] the weights are non-negative and sum to 1, which is why every sampled point
    lies inside the convex hull of the control points.
    """
    mt = 1.0 - t
    return (mt * mt * mt, 3.0 * mt * mt * t, 3.0 * mt * t * t, t * t * t)


def check_sample_count(name: str, value: int) -> None:
    """Raise ValueError unless value is an integer of at least 1."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


class CubicBezier:
    """
    One segment of the chain.

    p0 and p3 are the endpoints and may be shared with the neighbouring segments; p1 and
    p2 shape the curve and belong to this segment alone.
    """

    def __init__(self, p0: PhysicsPoint, p1: PhysicsPoint, p2: PhysicsPoint, p3: PhysicsPoint):
        self.p0 = p0
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3

    def control_points(self) -> Tuple[PhysicsPoint, PhysicsPoint, PhysicsPoint, PhysicsPoint]:
        return (self.p0, self.p1, self.p2, self.p3)

    def get_point(self, t: float) -> Vector2D:
        """
        Evaluate the curve position at parameter t.

        Exact at the ends: get_point(0) is p0's position and get_point(1) is p3's.
        Values of t outside [0, 1] extrapolate without error.
        """
        b0, b1, b2, b3 = bernstein_weights(t)
        a, b, c, d = self.p0.position, self.p1.position, self.p2.position, self.p3.position
        x = b0 * a.x + b1 * b.x + b2 * c.x + b3 * d.x
        y = b0 * a.y + b1 * b.y + b2 * c.y + b3 * d.y
        return Vector2D(x, y)

    def get_tangent(self, t: float) -> Vector2D:
        """
        Evaluate the first derivative B'(t).

        The result is not normalized: its length is the parametric speed. At t=0 it points
        along p1 - p0 and at t=1 along p3 - p2.
        """
        mt = 1.0 - t
        a, b, c, d = self.p0.position, self.p1.position, self.p2.position, self.p3.position
        w0 = 3.0 * mt * mt
        w1 = 6.0 * mt * t
        w2 = 3.0 * t * t
        x = w0 * (b.x - a.x) + w1 * (c.x - b.x) + w2 * (d.x - c.x)
        y = w0 * (b.y - a.y) + w1 * (c.y - b.y) + w2 * (d.y - c.y)
        return Vector2D(x, y)

    def tangent_sample(self, t: float) -> TangentSample:
        tangent = self.get_tangent(t)
        return TangentSample(t=t, point=self.get_point(t),
                             direction=tangent.normalize(), speed=tangent.magnitude())

    def sample_points(self, segments: int) -> Iterator[Vector2D]:
        """Return segments + 1 evenly spaced points for t = 0, 1/segments, ..., 1."""
        check_sample_count("segments", segments)
        return (self.get_point(i / segments) for i in range(segments + 1))

    def sample_tangents(self, count: int) -> Iterator[TangentSample]:
        """Return count tangents evenly spaced over [0, 1], ends included; one tangent sits at t=0.5."""
        check_sample_count("count", count)
        if count == 1:
            return iter([self.tangent_sample(0.5)])
        return (self.tangent_sample(i / (count - 1)) for i in range(count))

    def update(self, config, updated: Optional[Set[int]] = None) -> None:
        """
        Advance the physics of all four control points by one frame.

        Each point only reads its own previous state, so the order does not matter. When
        `updated` is given it holds the ids of points already advanced this frame (shared
        junctions); those are skipped and newly advanced ones are added.
        """
        for point in self.control_points():
            if updated is not None:
                if id(point) in updated:
                    continue
                updated.add(id(point))
            point.update(config)
