"""CLI for commit-lanes."""

import argparse
import sys
from pathlib import Path

from .graph import (
    CommitRecord,
    load_commits_json,
    parse_git_log_output,
    run_git_log,
    summarize_history,
)
from .layout import MISSING_PARENT, GraphConfig, build_vertices, layout_commits
from .visualize import generate_csv, generate_json, generate_summary


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    try:
        import yaml

        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("--input", type=Path, help="JSON file with the commit list")
    parser.add_argument("--repo", type=Path, help="Read commits from this git repository")
    parser.add_argument(
        "--max-count",
        type=int,
        help="Only read this many commits from the repository",
    )
    parser.add_argument(
        "--all",
        dest="all_refs",
        action="store_true",
        help="Read commits reachable from every ref, not only HEAD",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")


def resolve_common_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> dict:
    """Resolve common arguments from the command line and config file.

    Returns:
        The loaded config file contents (empty if no config file was given).
    """
    config = load_config(args.config) if args.config else {}

    # Command-line values win over the config file
    if not args.input and "input" in config:
        args.input = Path(config["input"])
    if not args.repo and "repo" in config:
        args.repo = Path(config["repo"])
    if args.max_count is None and "max-count" in config:
        args.max_count = int(config["max-count"])
    if not args.all_refs and config.get("all"):
        args.all_refs = True

    if not args.input and not args.repo:
        parser.error("one of --input or --repo is required")
    if args.input and args.repo:
        parser.error("--input and --repo are mutually exclusive")
    if args.input and (args.max_count is not None or args.all_refs):
        parser.error("--max-count and --all only apply to --repo")

    if args.input:
        args.input = args.input.resolve()
    if args.repo:
        args.repo = args.repo.resolve()

    return config


def load_history(args: argparse.Namespace) -> list[CommitRecord]:
    """Load the commit list selected by --input or --repo."""
    if args.input:
        print(f"Reading commits from {args.input}...")
        return load_commits_json(args.input)

    print(f"Reading git history of {args.repo}...")
    output = run_git_log(args.repo, max_count=args.max_count, all_refs=args.all_refs)
    return parse_git_log_output(output)


def cmd_layout(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Compute the lane layout and write its outputs."""
    config = resolve_common_args(args, parser)
    if args.output == Path("results") and "output" in config:
        args.output = Path(config["output"])
    args.output = args.output.resolve()
    args.output.mkdir(parents=True, exist_ok=True)

    try:
        graph_config = GraphConfig.from_mapping(config.get("graph") or {})
    except (TypeError, ValueError) as err:
        parser.error(f"invalid graph config: {err}")

    commits = load_history(args)
    print(f"Found {len(commits)} commits")
    if not commits:
        print("Warning: history is empty, writing an empty layout", file=sys.stderr)

    missing = sum(
        1 for v in build_vertices(commits) for p in v.parents if p == MISSING_PARENT
    )
    if missing:
        print(f"Warning: {missing} parent edge(s) lead outside the history", file=sys.stderr)

    model = layout_commits(commits, graph_config)
    print(f"Traced {len(model.branches)} branches, canvas {model.width:g} x {model.height:g}")

    generate_json(model, commits, args.output / "layout.json")
    print("Wrote layout.json")

    generate_csv(model, commits, args.output / "rows.csv")
    if commits:
        print("Wrote rows.csv")

    generate_summary(model, commits, args.output / "summary.txt")
    print("Wrote summary.txt")
    print(f"\nAll outputs written to {args.output}/")


def cmd_stats(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Print ancestry statistics of the history."""
    resolve_common_args(args, parser)
    commits = load_history(args)
    stats = summarize_history(commits)

    print(f"\nCommits:               {stats.commits}")
    print(f"Merges:                {stats.merges}")
    print(f"Root commits:          {stats.roots}")
    print(f"Without identifier:    {stats.anonymous}")
    print(f"Missing parents:       {stats.missing_parents}")
    if stats.acyclic:
        print(f"Longest chain:         {stats.longest_chain}")
    else:
        print("Warning: history contains a cycle", file=sys.stderr)


def main() -> None:
    """Main entry point for commit-lanes CLI."""
    parser = argparse.ArgumentParser(description="Compute lane layouts for commit history graphs")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser(
        "layout",
        help="Compute the lane layout and write JSON, CSV and summary outputs",
    )
    add_common_args(layout_parser)
    layout_parser.add_argument(
        "--output",
        type=Path,
        default=Path("results"),
        help="Output directory (default: results)",
    )

    stats_parser = subparsers.add_parser(
        "stats",
        help="Print ancestry statistics of the history",
    )
    add_common_args(stats_parser)

    args = parser.parse_args()

    if args.command == "layout":
        cmd_layout(args, layout_parser)
    elif args.command == "stats":
        cmd_stats(args, stats_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()


if __name__ == "__main__":
    main()
