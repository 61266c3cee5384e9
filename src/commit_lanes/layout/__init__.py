"""Lane layout engine for commit history graphs.

Commits are laid out one per row; branches are traced as coloured polylines
through lanes claimed first-fit at each row.
"""

from .colours import ColourLedger
from .engine import Layout, LayoutInvariantError, compute_layout, layout_commits, run_layout
from .geometry import Branch, BranchView, Line, Pixel, PlacedLine, Point
from .pixels import (
    DEFAULT_COLOURS,
    GraphConfig,
    PlacedBranch,
    PlacedVertex,
    RenderModel,
    canvas_size,
    place_layout,
    to_pixel,
)
from .tracer import LayoutContext, trace_path
from .vertices import MISSING_PARENT, Vertex, build_vertices

__all__ = [
    "build_vertices",
    "Vertex",
    "MISSING_PARENT",
    "ColourLedger",
    "LayoutContext",
    "trace_path",
    "run_layout",
    "compute_layout",
    "layout_commits",
    "Layout",
    "LayoutInvariantError",
    "Point",
    "Line",
    "Pixel",
    "PlacedLine",
    "Branch",
    "BranchView",
    "GraphConfig",
    "DEFAULT_COLOURS",
    "PlacedVertex",
    "PlacedBranch",
    "RenderModel",
    "to_pixel",
    "canvas_size",
    "place_layout",
]
