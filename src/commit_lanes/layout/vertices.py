"""Vertex arena built from the ordered commit list."""

from dataclasses import dataclass, field
from typing import NamedTuple

from ..graph import CommitRecord
from .geometry import Point

# Index standing in for every parent that is not part of the history
MISSING_PARENT = -1


class Slot(NamedTuple):
    """A lane claimed at a row: which vertex the line heads for, on which branch."""

    target: int
    branch: int


@dataclass
class Vertex:
    """One commit row of the layout.

    Parents and children are arena indices; a parent may be MISSING_PARENT.
    ``slots[lane]`` records the line occupying that lane at this row, lanes
    are claimed first-fit from 0 upwards.
    """

    row: int
    parents: list[int] = field(default_factory=list)
    children: list[int] = field(default_factory=list)
    branch: int | None = None
    lane: int = 0
    next_parent: int = 0
    slots: list[Slot] = field(default_factory=list)

    @property
    def is_placed(self) -> bool:
        return self.branch is not None

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def pending_parent(self) -> int | None:
        """Next parent whose edge has not been traced yet, or None."""
        if self.next_parent < len(self.parents):
            return self.parents[self.next_parent]
        return None

    def parent_processed(self) -> None:
        self.next_parent += 1

    def place(self, branch: int, lane: int) -> None:
        """Put the vertex on a branch; a placed vertex never moves."""
        if self.branch is None:
            self.branch = branch
            self.lane = lane

    def claim(self, lane: int, target: int, branch: int) -> bool:
        """Claim ``lane`` if it is the next free one.

        Returns:
            True if the lane was newly claimed, False if it was already taken.
        """
        if lane != len(self.slots):
            return False
        self.slots.append(Slot(target, branch))
        return True

    def point_towards(self, target: int, branch: int) -> Point | None:
        """Point of an existing line through this row heading for ``target`` on ``branch``."""
        for lane, slot in enumerate(self.slots):
            if slot.target == target and slot.branch == branch:
                return Point(lane, self.row)
        return None

    def point(self) -> Point:
        return Point(self.lane, self.row)

    def next_point(self) -> Point:
        return Point(len(self.slots), self.row)


def build_vertices(commits: list[CommitRecord]) -> list[Vertex]:
    """Create one vertex per commit and resolve parent identifiers.

    The first commit carrying an identifier owns it. Commits without an
    identifier are never entered in the lookup, so they cannot be referenced
    as parents and never collide with each other. Unresolved parents map to
    MISSING_PARENT without a back-link.

    Args:
        commits: Commits in display order; row index equals list position.

    Returns:
        Vertex arena indexed by row.
    """
    row_of: dict[str, int] = {}
    for row, commit in enumerate(commits):
        if commit.sha is not None and commit.sha not in row_of:
            row_of[commit.sha] = row

    vertices = [Vertex(row) for row in range(len(commits))]

    for row, commit in enumerate(commits):
        for sha in commit.parents:
            parent = row_of.get(sha)
            if parent is None:
                vertices[row].parents.append(MISSING_PARENT)
            else:
                vertices[row].parents.append(parent)
                vertices[parent].children.append(row)

    return vertices
