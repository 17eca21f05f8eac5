"""
Pytest configuration and shared fixtures.
"""

import logging
import tempfile
from pathlib import Path

import numpy as np
import pytest
import structlog

from polycsg.csg.polygon import Polygon
from polycsg.csg.solid import Solid
from polycsg.geometry.primitives import Cube


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dir(temp_dir):
    """Create a sample configuration directory with two tolerance profiles."""
    config_dir = temp_dir / "config"
    (config_dir / "profiles").mkdir(parents=True)

    tight_profile = """
tolerance:
  epsilon: 1.0e-7
  volume_tolerance: 1.0e-6
  description: "Tight tolerances for small parts"
"""
    (config_dir / "profiles" / "tight.yaml").write_text(tight_profile)

    loose_profile = """
tolerance:
  name: "Loose"
  epsilon: 1.0e-3
  bbox_tolerance: 0.01
"""
    (config_dir / "profiles" / "loose.yaml").write_text(loose_profile)

    return config_dir


@pytest.fixture
def unit_cube() -> Solid:
    """Unit cube centred at the origin."""
    return Cube.at((0.0, 0.0, 0.0), 1.0).to_solid()


@pytest.fixture
def overlapping_cube() -> Solid:
    """Unit cube centred at (0.5, 0, 0), overlapping ``unit_cube`` by half."""
    return Cube.at((0.5, 0.0, 0.0), 1.0).to_solid()


@pytest.fixture
def distant_cube() -> Solid:
    """Unit cube centred at (2, 0, 0), clear of ``unit_cube``."""
    return Cube.at((2.0, 0.0, 0.0), 1.0).to_solid()


@pytest.fixture
def make_prism():
    """Factory for a regular ``sides``-gon prism of radius 1 and height 1 at ``(cx, 0)``."""

    def _make(sides: int, cx: float = 0.0) -> Solid:
        angles = np.linspace(0.0, 2.0 * np.pi, sides, endpoint=False)
        ring = np.column_stack([cx + np.cos(angles), np.sin(angles)])
        bottom = [(x, y, -0.5) for x, y in ring]
        top = [(x, y, 0.5) for x, y in ring]

        polygons = [Polygon.from_points(bottom[::-1]), Polygon.from_points(top)]
        for i in range(sides):
            j = (i + 1) % sides
            polygons.append(Polygon.from_points([bottom[i], bottom[j], top[j], top[i]]))
        return Solid.from_polygons(polygons)

    return _make


@pytest.fixture
def reset_logging():
    """Undo configure_logging() after a test."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
