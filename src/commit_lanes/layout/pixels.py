"""Convert logical lanes and rows to pixel coordinates."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from .geometry import Line, Pixel, PlacedLine, Point

if TYPE_CHECKING:
    from .engine import Layout

DEFAULT_COLOURS = (
    "#eb6d5d",
    "#ef9536",
    "#f4d951",
    "#68d699",
    "#74ccfc",
    "#8f5ef9",
    "#ed84f3",
)


@dataclass(frozen=True)
class GraphConfig:
    """Grid spacing, margins and display palette."""

    cell_width: float = 16
    cell_height: float = 24
    margin_x: float = 16
    margin_y: float = 12
    colours: tuple[str, ...] = DEFAULT_COLOURS

    def __post_init__(self) -> None:
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise ValueError("cell_width and cell_height must be positive")
        if self.margin_x < 0 or self.margin_y < 0:
            raise ValueError("margin_x and margin_y must not be negative")
        if not self.colours:
            raise ValueError("colours must contain at least one entry")

    def colour_for(self, colour_id: int) -> str:
        """Display colour for a colour id, cycling through the palette."""
        return self.colours[colour_id % len(self.colours)]

    @classmethod
    def from_mapping(cls, mapping: dict) -> GraphConfig:
        """Build a config from YAML/JSON keys such as ``cell-width``.

        Raises:
            ValueError: For unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValueError(f"Unknown graph config key: {key}")
            if name == "colours":
                # A single colour given as a scalar is a one-entry palette
                value = (value,) if isinstance(value, str) else tuple(value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class PlacedVertex:
    """A commit's position and colour in render space."""

    row: int
    lane: int
    colour: int
    display_colour: str
    centre: Pixel


@dataclass(frozen=True)
class PlacedBranch:
    colour: int
    display_colour: str
    lines: tuple[PlacedLine, ...]


@dataclass(frozen=True)
class RenderModel:
    """Everything a renderer needs to draw the graph."""

    vertices: tuple[PlacedVertex, ...]
    branches: tuple[PlacedBranch, ...]
    width: float
    height: float


def to_pixel(point: Point, config: GraphConfig) -> Pixel:
    return Pixel(
        config.margin_x + config.cell_width * point.lane,
        config.margin_y + config.cell_height * point.row,
    )


def place_line(line: Line, config: GraphConfig) -> PlacedLine:
    return PlacedLine(to_pixel(line.start, config), to_pixel(line.end, config))


def canvas_size(rows: int, max_lane: int, config: GraphConfig) -> tuple[float, float]:
    """Canvas (width, height) for ``rows`` commits using lanes up to ``max_lane``.

    Args:
        rows: Number of commits.
        max_lane: Highest lane claimed, -1 if none.
        config: Spacing configuration.

    Returns:
        Tuple of (width, height).
    """
    width = 2 * config.margin_x + (max_lane + 1) * config.cell_width
    height = rows * config.cell_height + config.margin_y - config.cell_height / 2
    return width, height


def place_layout(layout: Layout, config: GraphConfig | None = None) -> RenderModel:
    """Convert a logical layout to render space.

    Args:
        layout: Result of compute_layout.
        config: Spacing and palette; defaults to GraphConfig().

    Returns:
        RenderModel with pixel centres, placed branch lines and canvas size.
    """
    config = config or GraphConfig()

    vertices = tuple(
        PlacedVertex(
            row=row,
            lane=lane,
            colour=colour,
            display_colour=config.colour_for(colour),
            centre=to_pixel(Point(lane, row), config),
        )
        for row, (lane, colour) in enumerate(zip(layout.lanes, layout.colours))
    )
    branches = tuple(
        PlacedBranch(
            colour=branch.colour,
            display_colour=config.colour_for(branch.colour),
            lines=tuple(place_line(line, config) for line in branch.lines),
        )
        for branch in layout.branches
    )
    width, height = canvas_size(layout.rows, layout.max_lane, config)
    return RenderModel(vertices=vertices, branches=branches, width=width, height=height)
