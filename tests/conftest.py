"""Shared test fixtures for springpath tests."""
import matplotlib
matplotlib.use("Agg")

import pytest
from springpath import ViewportContext, Viewport, PanelParams


@pytest.fixture
def context():
    """400 x 300 device units at 0.25 mm per unit (100 mm x 75 mm)."""
    return ViewportContext(origin=(0.0, 0.0), extent=(400.0, 300.0), device_to_physical_scale=(0.25, 0.25))


@pytest.fixture
def anisotropic_context():
    """Same device size as `context` but y units are twice as large physically."""
    return ViewportContext(origin=(0.0, 0.0), extent=(400.0, 300.0), device_to_physical_scale=(0.25, 0.5))


@pytest.fixture
def viewport():
    return Viewport(400, 300, device_to_physical_scale=(0.25, 0.25))


@pytest.fixture
def panel():
    """Data ranges 0..10 on both axes."""
    return PanelParams(x_range=(0.0, 10.0), y_range=(0.0, 10.0))


@pytest.fixture
def rows():
    return [
        {"x": 1.0, "y": 1.0, "xend": 9.0, "yend": 1.0},
        {"x": 1.0, "y": 5.0, "xend": 9.0, "yend": 9.0, "colour": "red", "tension": 0.5},
        {"x": 5.0, "y": 9.0, "xend": 5.0, "yend": 2.0, "linetype": "dashed", "size": 1.0, "diameter": 0.5},
    ]
