#!/usr/bin/env python3
"""
Chain of cubic Bezier segments wired end to end.

Topology
- Segment i's p3 is the very same PhysicsPoint object as segment i+1's p0, so the chain is
  positionally continuous (C0) by construction and a junction moves once for both curves.
- The chain's first p0 and last p3 are fixed; every other point is free.

Lifecycle
- initialize() is a full rebuild: old points are dropped, velocities start at zero and any
  targets set by the input layer are lost. It is used for first construction, reset and
  resize.
- update() advances every distinct point exactly once per call.
- Sampling methods return lazy iterators recomputed from current positions on every call.
"""
import logging
import math
from typing import Iterator, List

from .bezier import CubicBezier, check_sample_count
from .constants import P1_FRACTION, P2_FRACTION
from .data_models import PhysicsPoint, TangentSample
from .vector_utils import Vector2D

logger = logging.getLogger(__name__)


class BezierChain:
    """Ordered, connected sequence of CubicBezier segments spanning a canvas."""

    def __init__(self):
        self.curves: List[CubicBezier] = []
        self.width = 0.0
        self.height = 0.0

    def __len__(self) -> int:
        return len(self.curves)

    def initialize(self, num_segments: int, width: float, height: float) -> None:
        """
        Lay out num_segments curves left to right across the canvas.

        Each segment spans width / num_segments, with p1 at 33% and p2 at 67% of that span,
        all points on the vertical center line.

        Raises:
            ValueError: if num_segments < 1 or the canvas size is not finite and positive.
        """
        if isinstance(num_segments, bool) or not isinstance(num_segments, int) or num_segments < 1:
            raise ValueError(f"num_segments must be a positive integer, got {num_segments!r}")
        if not (math.isfinite(width) and math.isfinite(height) and width > 0 and height > 0):
            raise ValueError(f"Canvas must have positive size, got {width!r}x{height!r}")

        self.width = float(width)
        self.height = float(height)
        segment_width = self.width / num_segments
        center_y = self.height / 2

        curves: List[CubicBezier] = []
        for i in range(num_segments):
            x0 = i * segment_width
            x3 = (i + 1) * segment_width
            if i == 0:
                p0 = PhysicsPoint.at(x0, center_y, fixed=True)
            else:
                p0 = curves[i - 1].p3
            p1 = PhysicsPoint.at(x0 + segment_width * P1_FRACTION, center_y)
            p2 = PhysicsPoint.at(x0 + segment_width * P2_FRACTION, center_y)
            p3 = PhysicsPoint.at(x3, center_y, fixed=(i == num_segments - 1))
            curves.append(CubicBezier(p0, p1, p2, p3))

        self.curves = curves
        logger.debug("Chain initialized: %d segments over %.0fx%.0f", num_segments, self.width, self.height)

    def update(self, config) -> None:
        """Advance every control point once, curves in chain order, junctions deduplicated."""
        updated = set()
        for curve in self.curves:
            curve.update(config, updated)

    def control_points(self) -> List[PhysicsPoint]:
        """Every distinct control point in chain order (3n + 1 points for n curves)."""
        points: List[PhysicsPoint] = []
        seen = set()
        for curve in self.curves:
            for point in curve.control_points():
                if id(point) not in seen:
                    seen.add(id(point))
                    points.append(point)
        return points

    def rest_position(self, curve_index: int, role: int) -> Vector2D:
        """
        Where control point p<role> of a curve sits right after initialize().

        Only p1 and p2 (role 1 or 2) have a rest layout used for pointer mapping.
        """
        if role not in (1, 2):
            raise ValueError(f"role must be 1 or 2, got {role!r}")
        segment_width = self.width / len(self.curves)
        fraction = P1_FRACTION if role == 1 else P2_FRACTION
        return Vector2D(curve_index * segment_width + segment_width * fraction, self.height / 2)

    def sample_curve_points(self, segments_per_curve: int) -> Iterator[Vector2D]:
        """Return segments_per_curve + 1 points per curve, curve after curve."""
        check_sample_count("segments_per_curve", segments_per_curve)
        return (p for curve in self.curves for p in curve.sample_points(segments_per_curve))

    def sample_tangents(self, tangents_per_curve: int) -> Iterator[TangentSample]:
        check_sample_count("tangents_per_curve", tangents_per_curve)
        return (s for curve in self.curves for s in curve.sample_tangents(tangents_per_curve))

    def get_all_points(self, config) -> List[Vector2D]:
        return list(self.sample_curve_points(config.curve_sample_count))


def create_chain(segment_count: int, canvas_width: float, canvas_height: float) -> BezierChain:
    """Build and initialize a chain in one call."""
    chain = BezierChain()
    chain.initialize(segment_count, canvas_width, canvas_height)
    return chain
