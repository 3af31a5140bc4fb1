#!/usr/bin/env python3
"""
Data models for the Bezier Rope Simulator.

This module defines the small records shared between physics, sampling, presets and UI.

Units and usage
- Positions are screen pixels [px], velocities pixels per frame [px/frame].
- PhysicsPoint instances are shared by reference: a junction point belongs to two adjacent
  curves at once, so points compare by identity, never by coordinates.
- Points are mutated by the frame tick (update) and by the input layer (set_target). In the
  app both happen under SimulationController's lock.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .physics import pinned_step, spring_damper_step
from .vector_utils import Vector2D, ZERO

if TYPE_CHECKING:
    from .config import SimulationConfig


@dataclass(eq=False)
class PhysicsPoint:
    """
    A unit-mass control point pulled toward its target by a damped spring.

    Fields:
    - position: Current position (px)
    - velocity: Current velocity (px/frame)
    - target: Position the spring pulls toward (px)
    - is_fixed: Fixed points always sit exactly on their target
    """
    position: Vector2D
    velocity: Vector2D = ZERO
    target: Vector2D = None
    is_fixed: bool = False

    def __post_init__(self):
        if self.target is None:
            self.target = self.position

    @classmethod
    def at(cls, x: float, y: float, fixed: bool = False) -> "PhysicsPoint":
        """Create a resting point at (x, y) whose target is its own position."""
        return cls(position=Vector2D(float(x), float(y)), is_fixed=fixed)

    def set_target(self, x: float, y: float) -> None:
        """Move the target only; the point follows from the next update on."""
        self.target = Vector2D(float(x), float(y))

    def update(self, config: "SimulationConfig") -> None:
        """Advance one frame using the stiffness, damping and physics toggle from config."""
        if self.is_fixed or not config.physics_enabled:
            self.position, self.velocity = pinned_step(self.target)
            return
        self.position, self.velocity = spring_damper_step(
            self.position, self.velocity, self.target,
            config.spring_stiffness, config.damping,
        )


@dataclass(frozen=True)
class TangentSample:
    """
    A tangent taken at parameter t on one curve.

    direction is the unit tangent, or (0, 0) where the derivative vanishes.
    speed is the length of the raw derivative |B'(t)|.
    """
    t: float
    point: Vector2D
    direction: Vector2D
    speed: float

    def arrow_end(self, length: float) -> Vector2D:
        """End point of a fixed-length arrow drawn from point along direction."""
        return self.point.add(self.direction.scale(length))


@dataclass(frozen=True)
class PhysicsPreset:
    """Named stiffness/damping pair selectable from the UI or the 1-4 keys."""
    name: str
    spring_stiffness: float
    damping: float
    description: str = field(default="", compare=False)
