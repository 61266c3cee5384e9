"""Branch tracing: walk forward from a vertex, claiming lanes row by row.

Two passes exist:

1. Merge continuation: a placed merge vertex whose next parent already sits
   on a branch. The line extends the parent's branch and stops at the first
   row where a line towards that parent already runs, reusing its point.
2. Branch extension: a new branch starts at the vertex and follows parents,
   chaining every unplaced parent it reaches onto the same branch.
"""

from dataclasses import dataclass, field

from .colours import ColourLedger
from .geometry import Branch, Point
from .vertices import MISSING_PARENT, Vertex


@dataclass
class LayoutContext:
    """Mutable state of one layout pass."""

    vertices: list[Vertex]
    branches: list[Branch] = field(default_factory=list)
    ledger: ColourLedger = field(default_factory=ColourLedger)
    max_lane: int = -1  # Highest lane claimed at any row

    def claim(self, vertex: Vertex, lane: int, target: int, branch: int) -> None:
        if vertex.claim(lane, target, branch):
            self.max_lane = max(self.max_lane, lane)

    def new_branch(self, start_row: int) -> int:
        colour = self.ledger.allocate(start_row)
        self.branches.append(Branch(colour, start_row))
        return len(self.branches) - 1

    def colour_of(self, vertex: Vertex) -> int:
        return self.branches[vertex.branch].colour


def trace_path(ctx: LayoutContext, index: int) -> None:
    """Trace the next pending edge of the vertex at ``index``.

    Every call either places the vertex or consumes one of its parent edges.
    """
    vertex = ctx.vertices[index]
    parent = vertex.pending_parent()

    if (
        parent is not None
        and parent != MISSING_PARENT
        and vertex.is_merge
        and vertex.is_placed
        and ctx.vertices[parent].is_placed
    ):
        _trace_merge(ctx, index, parent)
    else:
        _trace_branch(ctx, index, parent)


def _trace_merge(ctx: LayoutContext, index: int, parent: int) -> None:
    """Draw a merge line from a placed vertex into its parent's branch."""
    vertices = ctx.vertices
    vertex = vertices[index]
    branch_id = vertices[parent].branch
    branch = ctx.branches[branch_id]
    last = vertex.point()

    # A parent at or above this row can never be reached by a forward scan
    first_row = index + 1 if parent > index else len(vertices)
    for row in range(first_row, len(vertices)):
        current = vertices[row]
        point = current.point_towards(parent, branch_id)
        joined = point is not None
        if not joined:
            point = current.next_point()
        branch.add_line(last, point)
        ctx.claim(current, point.lane, parent, branch_id)
        last = point
        if joined:
            break

    vertex.parent_processed()


def _trace_branch(ctx: LayoutContext, index: int, parent: int | None) -> None:
    """Start a branch at ``index`` and follow parents until the path ends."""
    vertices = ctx.vertices
    vertex = vertices[index]
    start = vertex.point() if vertex.is_placed else vertex.next_point()

    branch_id = ctx.new_branch(index)
    branch = ctx.branches[branch_id]
    vertex.place(branch_id, start.lane)
    ctx.claim(vertex, start.lane, index, branch_id)
    last = start

    source, target = vertex, parent
    if target is not None:
        for row in range(index + 1, len(vertices)):
            current = vertices[row]
            if row == target and current.is_placed:
                point = current.point()
            else:
                point = current.next_point()
            branch.add_line(last, point)
            ctx.claim(current, point.lane, target, branch_id)
            last = point

            if row == target:
                source.parent_processed()
                already_placed = current.is_placed
                current.place(branch_id, point.lane)
                # Continue through the parent towards its own next parent
                source, target = current, current.pending_parent()
                if target is None or already_placed:
                    break
        else:
            # History ends off-screen or the parent is not below this row
            source.parent_processed()

    branch.end_row = last.row
    ctx.ledger.reserve(branch.colour, last.row)
