"""Generate layout outputs for external renderers."""

import csv
import json
from pathlib import Path

from .graph import CommitRecord, summarize_history
from .layout import RenderModel

ROW_FIELDS = ["row", "sha", "subject", "author", "date", "lane", "colour", "display_colour", "x", "y"]


def _row_records(model: RenderModel, commits: list[CommitRecord]) -> list[dict]:
    """Merge placed vertices with the commit metadata of their rows."""
    records = []
    for vertex, commit in zip(model.vertices, commits):
        records.append(
            {
                "row": vertex.row,
                "sha": commit.sha,
                "subject": commit.subject,
                "author": commit.author.name if commit.author else None,
                "date": commit.date,
                "lane": vertex.lane,
                "colour": vertex.colour,
                "display_colour": vertex.display_colour,
                "x": vertex.centre.x,
                "y": vertex.centre.y,
            }
        )
    return records


def generate_json(model: RenderModel, commits: list[CommitRecord], output_file: Path) -> None:
    """Write the render model as JSON.

    Args:
        model: Placed layout.
        commits: Commits the layout was computed from (same order).
        output_file: Path to write the JSON file.
    """
    data = {
        "width": model.width,
        "height": model.height,
        "rows": _row_records(model, commits),
        "branches": [
            {
                "colour": branch.colour,
                "display_colour": branch.display_colour,
                "lines": [
                    [[line.start.x, line.start.y], [line.end.x, line.end.y]]
                    for line in branch.lines
                ],
            }
            for branch in model.branches
        ],
    }

    with open(output_file, "w") as f:
        json.dump(data, f, indent=2)


def generate_csv(model: RenderModel, commits: list[CommitRecord], output_file: Path) -> None:
    """Write one CSV row per commit.

    Args:
        model: Placed layout.
        commits: Commits the layout was computed from (same order).
        output_file: Path to write the CSV file.
    """
    records = _row_records(model, commits)
    if not records:
        return

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=ROW_FIELDS)
        writer.writeheader()
        for r in records:
            writer.writerow(r)


def generate_summary(model: RenderModel, commits: list[CommitRecord], output_file: Path) -> None:
    """Write a human-readable summary of the history and its layout.

    Args:
        model: Placed layout.
        commits: Commits the layout was computed from.
        output_file: Path to write the summary file.
    """
    stats = summarize_history(commits)
    widest = max((v.lane for v in model.vertices), default=-1)

    with open(output_file, "w") as f:
        f.write("=" * 60 + "\n")
        f.write("Commit Lanes Layout Summary\n")
        f.write("=" * 60 + "\n\n")

        f.write(f"Commits: {stats.commits}\n")
        f.write(f"Merges: {stats.merges}\n")
        f.write(f"Root commits: {stats.roots}\n")
        f.write(f"Commits without identifier: {stats.anonymous}\n")
        f.write(f"Parents outside the history: {stats.missing_parents}\n")
        if stats.acyclic:
            f.write(f"Longest ancestry chain: {stats.longest_chain} commits\n")
        else:
            f.write("Warning: history contains a cycle\n")

        f.write("\n")
        f.write("Layout\n")
        f.write("-" * 40 + "\n")
        f.write(f"Branches: {len(model.branches)}\n")
        f.write(f"Colours used: {len({b.colour for b in model.branches})}\n")
        f.write(f"Highest commit lane: {widest}\n")
        f.write(f"Canvas: {model.width:g} x {model.height:g}\n")
