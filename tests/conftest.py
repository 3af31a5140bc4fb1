"""Test fixtures for the Bezier core tests.

Provides default configurations, fresh chains and single points.
"""
import pytest

from bezier_core.bezier import CubicBezier
from bezier_core.chain import create_chain
from bezier_core.config import SimulationConfig
from bezier_core.data_models import PhysicsPoint


@pytest.fixture
def config():
    """Default settings: k=0.15, c=0.85, physics on."""
    return SimulationConfig()


@pytest.fixture
def chain():
    """Three segments over a 300x100 canvas (segment width 100, center line y=50)."""
    return create_chain(3, 300, 100)


@pytest.fixture
def s_curve():
    """A free-standing S-shaped curve with distinct, non-collinear control points."""
    return CubicBezier(
        PhysicsPoint.at(0, 0),
        PhysicsPoint.at(30, 80),
        PhysicsPoint.at(70, -40),
        PhysicsPoint.at(100, 20),
    )


@pytest.fixture
def free_point():
    """A resting free point at the origin."""
    return PhysicsPoint.at(0, 0)
