#!/usr/bin/env python3
"""
Pointer-to-target mapping for the chain.

A single pointer position (mouse or touch) is turned into targets for every curve's p1
and p2. The horizontal pull is strongest on the middle curve and fades parabolically
toward the chain ends; the vertical pull bends p1 a little less and p2 a little more,
giving the rope its wave. Targets are always computed from the rest layout, so repeated
moves never accumulate.

This is input-layer logic: the physics only ever sees set_target calls.
"""
from .chain import BezierChain
from .constants import P1_Y_WEIGHT, P2_Y_WEIGHT, POINTER_X_GAIN, POINTER_Y_GAIN


def falloff(curve_index: int, curve_count: int) -> float:
    """1.0 for the middle curve, 0.0 for the outermost ones; a lone curve gets 1.0."""
    if curve_count < 2:
        return 1.0
    progress = curve_index / (curve_count - 1)
    return 1.0 - abs(progress - 0.5) * 2.0


def apply_pointer(chain: BezierChain, pointer_x: float, pointer_y: float) -> None:
    """Set p1/p2 targets of every curve from a pointer position in canvas pixels."""
    if not chain.curves:
        return
    offset_x = (pointer_x - chain.width / 2) * POINTER_X_GAIN
    offset_y = (pointer_y - chain.height / 2) * POINTER_Y_GAIN
    n = len(chain.curves)
    for index, curve in enumerate(chain.curves):
        fx = offset_x * falloff(index, n)
        rest1 = chain.rest_position(index, 1)
        rest2 = chain.rest_position(index, 2)
        curve.p1.set_target(rest1.x + fx, rest1.y + offset_y * P1_Y_WEIGHT)
        curve.p2.set_target(rest2.x + fx, rest2.y + offset_y * P2_Y_WEIGHT)
