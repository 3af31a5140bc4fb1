#!/usr/bin/env python3
"""
Spring-damper integrator for the Bezier Rope Simulator

Responsibilities
- Advance one control point toward its target with a damped spring (Hooke's law plus
  linear damping), one explicit (forward) Euler step per call.
- Tell whether a (stiffness, damping) pair keeps that step stable.

Units and conventions
- Positions are screen pixels [px].
- Velocities are pixels per frame [px/frame].
- The time step is one frame. Stiffness and damping are tuned for a 60 Hz tick, so the
  caller must step at a fixed rate (see constants.FRAME_DT) rather than per rendered frame.
- Mass is normalized to 1, so acceleration equals force.

Numerical notes
- Writing x for the displacement from the target, k for stiffness and c for damping, one
  step is the linear map
      v' = (1 - c) v - k x
      x' = x + v' = (1 - k) x + (1 - c) v
  whose matrix has trace 2 - k - c and determinant 1 - c. By the Jury criterion both
  eigenvalues lie inside the unit circle iff k > 0, 0 < c < 2 and k + 2c < 4. Inside that
  region a point with a constant target converges to it; outside it the motion grows
  without bound. Nothing here clamps velocity: an unstable pair shows up as the curve
  "exploding" on screen.

Threading
- Pure compute; callers own the point state and any locking around it.
"""

from typing import Tuple

from .vector_utils import Vector2D, ZERO


def spring_damper_step(position: Vector2D, velocity: Vector2D, target: Vector2D,
                       stiffness: float, damping: float) -> Tuple[Vector2D, Vector2D]:
    """
    Perform one explicit Euler step of the damped spring.

    The spring pulls the point toward its target and the damper resists motion:

        acceleration = -stiffness * (position - target) - damping * velocity
        velocity    <- velocity + acceleration
        position    <- position + velocity

    Args:
        position: Current position (px).
        velocity: Current velocity (px/frame).
        target: Rest position the spring pulls toward (px).
        stiffness: Spring constant k (per frame^2).
        damping: Damping coefficient c (per frame).

    Returns:
        (new_position, new_velocity)
    """
    displacement = position.subtract(target)
    spring_force = displacement.scale(-stiffness)
    damping_force = velocity.scale(-damping)
    acceleration = spring_force.add(damping_force)

    new_velocity = velocity.add(acceleration)
    new_position = position.add(new_velocity)
    return new_position, new_velocity


def pinned_step(target: Vector2D) -> Tuple[Vector2D, Vector2D]:
    """Snap to the target with no momentum (fixed points, or physics switched off)."""
    return target, ZERO


def is_stable(stiffness: float, damping: float) -> bool:
    """
    Check whether spring_damper_step converges for these constants.

    Args:
        stiffness: Spring constant k.
        damping: Damping coefficient c.

    Returns:
        True if repeated steps toward a constant target converge, False if they
        oscillate forever or diverge.
    """
    return stiffness > 0.0 and 0.0 < damping < 2.0 and stiffness + 2.0 * damping < 4.0
