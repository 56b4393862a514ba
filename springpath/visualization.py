"""
Module containing matplotlib rendering of spring nodes.
Spring geometry is regenerated at draw time from the axes' current size in pixels and the figure's dpi,
so coils keep their physical diameter when the figure is resized or saved at another resolution.
"""

import matplotlib.pyplot as plt
from matplotlib.artist import allow_rasterization
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.transforms import IdentityTransform

from .config import MM_PER_INCH, PLOT_MARGIN_FACTOR
from .interfaces import Drawable
from .points import Polyline, PointArray
from .scene import SpringNode
from .styles import CAP_STYLES, SpringStyle
from .viewport import Viewport

def viewport_from_axes(ax: Axes, viewport: Viewport | None = None) -> Viewport:
    """
    Returns a viewport matching the axes' window extent in pixels.
    If `viewport` is provided, it is updated in place, so its version only changes if the axes geometry changed.
    """
    bbox = ax.get_window_extent()
    scale = MM_PER_INCH / ax.figure.dpi
    if viewport is None:
        return Viewport(bbox.width, bbox.height, origin = (bbox.x0, bbox.y0), device_to_physical_scale = (scale, scale))
    viewport.set_geometry((bbox.x0, bbox.y0), (bbox.width, bbox.height), (scale, scale))
    return viewport

def apply_style(collection: LineCollection, style: SpringStyle, polylines: list[Polyline]) -> None:
    """
    Applies the stroke of each polyline's path to the collection, matched by `path_id`.
    """
    strokes = [style.for_path(polyline.path_id) for polyline in polylines]
    if not strokes:
        return
    collection.set_color([stroke.colour for stroke in strokes])
    collection.set_linewidth([stroke.width for stroke in strokes])
    collection.set_linestyle(["solid" if stroke.dashes is None else (0, stroke.dashes) for stroke in strokes])
    collection.set_capstyle(CAP_STYLES[style.cap])

class SpringCollection(LineCollection):
    """
    Line collection drawing the polylines of a drawable in display coordinates.
    Geometry is pulled from the drawable on every draw; the drawable only regenerates it when the axes changed.
    """

    def __init__(self, node: Drawable, viewport: Viewport | None = None, **kwargs) -> None:
        if isinstance(node, SpringNode):
            kwargs = {**node.style.collection_properties(node.num_springs), **kwargs}
        super().__init__([], **kwargs)
        self.node = node
        self.viewport = viewport
        self.polylines: list[Polyline] = []
        self.set_transform(IdentityTransform())

    def update_geometry(self) -> list[Polyline]:
        """
        Syncs the viewport with the axes and refreshes the segments from the drawable.
        """
        if self.axes is None:
            raise RuntimeError("Add the collection to an axes before drawing it")
        self.viewport = viewport_from_axes(self.axes, self.viewport)
        context = self.viewport.context
        self.polylines = self.node.draw(context)
        self.set_segments([context.to_device(polyline.points) for polyline in self.polylines])
        if isinstance(self.node, SpringNode):
            apply_style(self, self.node.style, self.polylines)
        return self.polylines

    @allow_rasterization
    def draw(self, renderer) -> None:
        if not self.get_visible():
            return
        self.update_geometry()
        super().draw(renderer)

def plot_springs(ax: Axes, node: Drawable) -> SpringCollection:
    """
    Adds the drawable to the axes. Its geometry is computed when the figure is drawn.
    """
    collection = SpringCollection(node)
    ax.add_collection(collection, autolim = False)
    return collection

def plot_data_springs(ax: Axes, springs: list[Polyline], style: SpringStyle | None = None) -> LineCollection:
    """
    Plots springs computed in data space, with plot bounds hugging them and an equal aspect ratio.
    """
    style = style if style is not None else SpringStyle()
    collection = LineCollection([spring.points for spring in springs])
    apply_style(collection, style, springs)
    ax.add_collection(collection)
    if springs:
        min_point, max_point = PointArray.concatenate(springs).bounding_points(margin_factor = PLOT_MARGIN_FACTOR)
        ax.set_xlim(min_point.x, max_point.x)
        ax.set_ylim(min_point.y, max_point.y)
    ax.set_aspect('equal')
    return collection

def view_springs(node: Drawable) -> None:
    """
    Opens a window showing the drawable. Resize the window to see the springs keep their physical diameter.
    """
    _, ax = plt.subplots()
    plot_springs(ax, node)
    plt.show()
