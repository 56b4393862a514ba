"""Tests for springpath/viewport.py."""
import numpy as np
import pytest
from springpath.viewport import Viewport, ViewportContext


def test_default_scale_uses_dpi():
    viewport = Viewport(100, 50)
    sx, sy = viewport.context.device_to_physical_scale
    assert abs(sx - 25.4 / 72) < 1e-12
    assert sx == sy


def test_physical_extent(context):
    assert context.physical_extent == (100.0, 75.0)


def test_resize_bumps_version(viewport):
    assert viewport.version == 0
    viewport.resize(800, 300)
    assert viewport.version == 1
    assert viewport.context.extent == (800.0, 300.0)


def test_unchanged_geometry_keeps_version(viewport):
    before = viewport.context
    viewport.resize(400, 300)
    viewport.pan(0, 0)
    assert viewport.version == 0
    assert viewport.context is before


def test_versions_increase_monotonically(viewport):
    viewport.resize(500, 300).pan(10, 5).rescale(0.5)
    assert viewport.version == 3
    assert viewport.context.origin == (10.0, 5.0)
    assert viewport.context.device_to_physical_scale == (0.5, 0.5)


def test_contexts_are_superseded_not_patched(viewport):
    first = viewport.context
    viewport.resize(10, 10)
    assert first.extent == (400.0, 300.0)
    assert first.version == 0


def test_set_geometry(viewport):
    context = viewport.set_geometry((1, 2), (3, 4), (0.1, 0.2))
    assert context.version == 1
    assert context.origin == (1.0, 2.0)
    assert context.same_geometry(viewport.context)


def test_to_device():
    context = ViewportContext(origin=(10.0, 20.0), extent=(200.0, 100.0), device_to_physical_scale=(0.5, 0.25))
    device = context.to_device([[50.0, 12.5], [0.0, 0.0]])
    assert np.allclose(device, [[110.0, 70.0], [10.0, 20.0]])


def test_invalid_geometry():
    with pytest.raises(ValueError):
        ViewportContext(origin=(0.0, 0.0), extent=(-1.0, 10.0), device_to_physical_scale=(1.0, 1.0))
    with pytest.raises(ValueError):
        ViewportContext(origin=(0.0, 0.0), extent=(1.0, 10.0), device_to_physical_scale=(0.0, 1.0))


def test_viewport_logs_changes(viewport):
    viewport.resize(10, 10)
    assert "version 1" in viewport.get_log()
