"""Tests for springpath/visualization.py using the Agg backend."""
import matplotlib.pyplot as plt
import numpy as np
import pytest
from springpath import PhysicalLength, CartesianCoordinates, EmptyNode, draw_layer, make_spring_node, compute_data_springs
from springpath.visualization import SpringCollection, plot_springs, plot_data_springs, viewport_from_axes


@pytest.fixture
def figure():
    fig, ax = plt.subplots(figsize=(4, 3), dpi=100)
    yield fig, ax
    plt.close(fig)


def coil_height_px(collection):
    """Vertical extent of the first (horizontal) spring in pixels."""
    segment = collection.get_segments()[0]
    return segment[:, 1].max() - segment[:, 1].min()


def test_viewport_follows_axes(figure):
    fig, ax = figure
    viewport = viewport_from_axes(ax)
    bbox = ax.get_window_extent()
    assert viewport.context.extent == (bbox.width, bbox.height)
    assert viewport.context.device_to_physical_scale == (25.4 / 100, 25.4 / 100)
    assert viewport_from_axes(ax, viewport).version == 0


def test_physical_diameter_survives_resize(figure):
    fig, ax = figure
    node = make_spring_node((0.1, 0.5), (0.9, 0.5), diameter=PhysicalLength(5.0, "mm"))
    collection = plot_springs(ax, node)
    fig.canvas.draw()
    expected_px = 5.0 / (25.4 / 100)
    before = coil_height_px(collection)
    assert before == pytest.approx(expected_px, rel=0.01)

    fig.set_size_inches(8, 3)
    fig.canvas.draw()
    assert collection.viewport.version == 1
    assert coil_height_px(collection) == pytest.approx(before, rel=0.01)


def test_redraw_without_change_reuses_geometry(figure):
    fig, ax = figure
    node = make_spring_node((0.1, 0.5), (0.9, 0.5), diameter=PhysicalLength(5.0, "mm"))
    plot_springs(ax, node)
    fig.canvas.draw()
    fig.canvas.draw()
    assert node.get_log().count("Regenerated") == 1


def test_higher_dpi_keeps_physical_size(figure):
    fig, ax = figure
    node = make_spring_node((0.1, 0.5), (0.9, 0.5), diameter=PhysicalLength(5.0, "mm"))
    collection = plot_springs(ax, node)
    fig.canvas.draw()
    before = coil_height_px(collection)
    fig.set_dpi(200)
    fig.canvas.draw()
    assert coil_height_px(collection) == pytest.approx(2 * before, rel=0.01)


def test_segments_are_inside_axes(figure, rows, panel):
    fig, ax = figure
    collection = plot_springs(ax, draw_layer(rows, panel, CartesianCoordinates()))
    fig.canvas.draw()
    bbox = ax.get_window_extent()
    segments = collection.get_segments()
    assert len(segments) == 3
    for segment in segments:
        assert segment[:, 0].min() > bbox.x0 and segment[:, 0].max() < bbox.x1


def test_per_path_styles_applied(figure, rows, panel):
    fig, ax = figure
    collection = plot_springs(ax, draw_layer(rows, panel, CartesianCoordinates()))
    fig.canvas.draw()
    colours = collection.get_colors()
    assert np.allclose(colours[1], (1.0, 0.0, 0.0, 1.0))
    assert np.allclose(colours[0], (0.0, 0.0, 0.0, 1.0))


def test_empty_node_draws_nothing(figure):
    fig, ax = figure
    collection = plot_springs(ax, EmptyNode())
    fig.canvas.draw()
    assert len(collection.get_segments()) == 0


def test_collection_needs_axes():
    collection = SpringCollection(EmptyNode())
    with pytest.raises(RuntimeError):
        collection.update_geometry()


def test_plot_data_springs(figure):
    _, ax = figure
    springs = compute_data_springs([{"x": 0.0, "y": 0.0, "xend": 10.0, "yend": 0.0, "diameter": 2.0, "tension": 1.0}])
    plot_data_springs(ax, springs)
    low, high = ax.get_xlim()
    assert low < 1.0 and high > 11.0
    assert ax.get_aspect() == 1.0
