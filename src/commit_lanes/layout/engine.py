"""Layout driver: place every commit and trace every parent edge."""

from dataclasses import dataclass

from ..graph import CommitRecord
from .geometry import BranchView
from .pixels import GraphConfig, RenderModel, place_layout
from .tracer import LayoutContext, trace_path
from .vertices import build_vertices


class LayoutInvariantError(RuntimeError):
    """The driver stopped making progress; this is a bug, not bad input."""


@dataclass(frozen=True)
class Layout:
    """Logical layout of a commit history.

    Attributes:
        lanes: Lane of each row's commit.
        colours: Colour id of the branch each row's commit sits on.
        branches: Finished branches in creation order.
        max_lane: Highest lane claimed at any row (-1 for an empty history).
        colour_count: Number of distinct colour ids allocated.
    """

    lanes: tuple[int, ...]
    colours: tuple[int, ...]
    branches: tuple[BranchView, ...]
    max_lane: int
    colour_count: int

    @property
    def rows(self) -> int:
        return len(self.lanes)


def run_layout(commits: list[CommitRecord]) -> LayoutContext:
    """Run the driver loop and return the finished layout context.

    The cursor stays on a row while its commit is unplaced or still has
    parent edges to trace; each tracer call consumes one of those, so the
    loop terminates.

    Raises:
        LayoutInvariantError: If a tracer call made no progress.
    """
    ctx = LayoutContext(build_vertices(commits))
    vertices = ctx.vertices

    i = 0
    while i < len(vertices):
        vertex = vertices[i]
        if vertex.pending_parent() is None and vertex.is_placed:
            i += 1
            continue

        before = (vertex.next_parent, vertex.is_placed)
        trace_path(ctx, i)
        if (vertex.next_parent, vertex.is_placed) == before:
            raise LayoutInvariantError(
                f"Tracing row {i} made no progress "
                f"(parent {vertex.next_parent} of {len(vertex.parents)})"
            )

    return ctx


def compute_layout(commits: list[CommitRecord]) -> Layout:
    """Compute lanes, colours and branch lines for a commit history.

    Args:
        commits: Commits in display order; parents may appear anywhere or not at all.

    Returns:
        Layout that shares no state with the engine.
    """
    ctx = run_layout(commits)
    return Layout(
        lanes=tuple(v.lane for v in ctx.vertices),
        colours=tuple(ctx.colour_of(v) for v in ctx.vertices),
        branches=tuple(BranchView.from_branch(b) for b in ctx.branches),
        max_lane=ctx.max_lane,
        colour_count=len(ctx.ledger),
    )


def layout_commits(
    commits: list[CommitRecord],
    config: GraphConfig | None = None,
) -> RenderModel:
    """Compute the layout and convert it to pixel space."""
    return place_layout(compute_layout(commits), config)
