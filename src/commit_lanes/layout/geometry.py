"""Logical and pixel-space points, lines and branches."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Point:
    """Logical grid coordinate: lane (x) and row (y)."""

    lane: int
    row: int


@dataclass(frozen=True)
class Line:
    """Segment between two logical points."""

    start: Point
    end: Point


@dataclass(frozen=True)
class Pixel:
    """Point converted to render space."""

    x: float
    y: float


@dataclass(frozen=True)
class PlacedLine:
    """Line converted to render space."""

    start: Pixel
    end: Pixel


@dataclass
class Branch:
    """One coloured path, grown segment by segment while tracing.

    ``end_row`` is the last row the colour stays reserved for this branch.
    """

    colour: int
    start_row: int
    end_row: int = -1
    lines: list[Line] = field(default_factory=list)

    def add_line(self, start: Point, end: Point) -> None:
        self.lines.append(Line(start, end))


@dataclass(frozen=True)
class BranchView:
    """Immutable snapshot of a finished branch."""

    colour: int
    start_row: int
    end_row: int
    lines: tuple[Line, ...]

    @classmethod
    def from_branch(cls, branch: Branch) -> "BranchView":
        return cls(branch.colour, branch.start_row, branch.end_row, tuple(branch.lines))
