#!/usr/bin/env python3
"""
Simulation configuration.

SimulationConfig is a frozen value passed into every update and sampling call. Changing a
setting means building a new value (updated / with_preset) and swapping it in; the next
tick picks it up. Nothing in the core reads global state.
"""
import logging
import math
from dataclasses import dataclass, fields, replace

from .constants import (
    DAMPING_RANGE,
    DEFAULT_CURVE_SAMPLES,
    DEFAULT_DAMPING,
    DEFAULT_SEGMENT_COUNT,
    DEFAULT_SPRING_STIFFNESS,
    DEFAULT_TANGENT_COUNT,
    DEFAULT_TANGENT_LENGTH,
    STIFFNESS_RANGE,
)
from .data_models import PhysicsPreset
from .physics import is_stable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Physics, sampling and display settings.

    Fields:
    - spring_stiffness, damping: spring-damper constants (per-frame units)
    - physics_enabled: when False every point snaps to its target
    - tangent_length: arrow length in px
    - tangent_count: tangents sampled per curve
    - curve_sample_count: polyline segments per curve (samples = count + 1)
    - segment_count: curves in the chain; changing it rebuilds the chain
    - show_tangents, show_control_points, show_gradient: renderer toggles
    """
    spring_stiffness: float = DEFAULT_SPRING_STIFFNESS
    damping: float = DEFAULT_DAMPING
    physics_enabled: bool = True
    tangent_length: float = DEFAULT_TANGENT_LENGTH
    tangent_count: int = DEFAULT_TANGENT_COUNT
    curve_sample_count: int = DEFAULT_CURVE_SAMPLES
    segment_count: int = DEFAULT_SEGMENT_COUNT
    show_tangents: bool = True
    show_control_points: bool = True
    show_gradient: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Reject values that would produce wrong geometry.

        Constants that are merely outside the recommended (stable) ranges are accepted with
        a warning, since an exploding curve is a visible, recoverable condition.

        Raises:
            ValueError: if a count is not a positive integer, or a length or constant is
                not a finite, non-negative number.
        """
        for name in ("spring_stiffness", "damping", "tangent_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value!r}")
        for name in ("tangent_count", "curve_sample_count", "segment_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value!r}")

        if not is_stable(self.spring_stiffness, self.damping):
            logger.warning("Spring constants k=%.3f c=%.3f are unstable; the curve will diverge",
                           self.spring_stiffness, self.damping)
        elif not (STIFFNESS_RANGE[0] <= self.spring_stiffness <= STIFFNESS_RANGE[1]
                  and DAMPING_RANGE[0] <= self.damping <= DAMPING_RANGE[1]):
            logger.warning("Spring constants k=%.3f c=%.3f are outside the recommended ranges",
                           self.spring_stiffness, self.damping)

    def updated(self, **changes) -> "SimulationConfig":
        """Return a validated copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def with_preset(self, preset: PhysicsPreset) -> "SimulationConfig":
        return self.updated(spring_stiffness=preset.spring_stiffness, damping=preset.damping)
