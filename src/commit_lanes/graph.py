"""Load commit histories and describe their ancestry graph."""

import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import networkx as nx

# Field and record separators used in the git log pretty format
FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"
GIT_LOG_FORMAT = "%x1f".join(["%H", "%P", "%an", "%ae", "%aI", "%s", "%b"]) + "%x1e"


@dataclass
class Author:
    """Commit author metadata."""

    name: str | None = None
    email: str | None = None


@dataclass
class CommitRecord:
    """One commit of the history, in display order.

    Only ``sha`` and ``parents`` are read by the layout engine; the remaining
    fields are carried through to the exported rows.
    """

    sha: str | None = None
    parents: list[str] = field(default_factory=list)
    subject: str | None = None
    body: str | None = None
    author: Author | None = None
    date: str | None = None


@dataclass
class HistoryStats:
    """Summary statistics of a commit history.

    ``missing_parents`` counts distinct parent identifiers absent from the
    history, not parent edges: two commits sharing a missing parent count once.
    """

    commits: int = 0
    merges: int = 0
    roots: int = 0
    anonymous: int = 0
    missing_parents: int = 0
    acyclic: bool = True
    longest_chain: int | None = None  # Commits on the longest ancestry chain


def commit_from_dict(data: dict) -> CommitRecord:
    """Build a CommitRecord from a JSON-style mapping.

    Args:
        data: Mapping with ``sha`` (or ``hash``/``id``), ``parents`` and optional
            ``subject``, ``body``, ``author`` and ``date`` keys.

    Returns:
        The commit record.

    Raises:
        ValueError: If the mapping is not a dict or ``parents`` has the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Commit entry must be an object, got {type(data).__name__}")

    sha = data.get("sha", data.get("hash", data.get("id")))
    # Parent references are matched as strings, so numeric ids must be too
    if sha is not None:
        sha = str(sha)

    parents = data.get("parents") or []
    if isinstance(parents, str):
        # git's %P format: space separated parent hashes
        parents = parents.split()
    elif not isinstance(parents, list):
        raise ValueError(f"Commit {sha!r}: parents must be a list or a string")

    author = data.get("author")
    if isinstance(author, dict):
        author = Author(name=author.get("name"), email=author.get("email"))
    elif isinstance(author, str):
        author = Author(name=author)
    else:
        author = None

    return CommitRecord(
        sha=sha,
        parents=[str(p) for p in parents],
        subject=data.get("subject"),
        body=data.get("body"),
        author=author,
        date=data.get("date"),
    )


def load_commits_json(path: Path) -> list[CommitRecord]:
    """Load commits from a JSON file.

    The file holds either an array of commit objects or an object with a
    ``commits`` array.

    Args:
        path: Path to the JSON file.

    Returns:
        Commits in file order.

    Raises:
        ValueError: If the top-level JSON value has an unsupported shape.
    """
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, dict) and isinstance(data.get("commits"), list):
        data = data["commits"]
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of commits or an object with 'commits'")

    return [commit_from_dict(entry) for entry in data]


def run_git_log(
    repo: Path,
    max_count: int | None = None,
    all_refs: bool = False,
    git: str = "git",
) -> str:
    """Run git log in a repository and return its raw output.

    Args:
        repo: Path to the repository (any directory inside the work tree).
        max_count: Optional limit on the number of commits.
        all_refs: Include every ref instead of only HEAD.
        git: git executable to invoke.

    Returns:
        stdout of git log in the format understood by parse_git_log_output.

    Raises:
        RuntimeError: If git exits with a non-zero status.
    """
    cmd = [git, "log", "--date-order", f"--pretty=format:{GIT_LOG_FORMAT}"]
    if max_count is not None:
        cmd.append(f"--max-count={max_count}")
    if all_refs:
        cmd.append("--all")

    result = subprocess.run(cmd, cwd=repo, capture_output=True, text=True)
    if result.returncode != 0:
        raise RuntimeError(f"git log failed in {repo}: {result.stderr.strip()}")
    return result.stdout


def parse_git_log_output(output: str) -> list[CommitRecord]:
    """Parse git log output produced with GIT_LOG_FORMAT.

    Records are separated by RECORD_SEP (git adds a newline between them) and
    fields by FIELD_SEP. The body is last so it may contain newlines.

    Args:
        output: stdout of run_git_log.

    Returns:
        Commits in log order (newest first).
    """
    commits = []
    for record in output.split(RECORD_SEP):
        record = record.lstrip("\n")
        if not record:
            continue
        fields = record.split(FIELD_SEP)
        # Pad in case a trailing empty field was dropped
        fields += [""] * (7 - len(fields))
        sha, parents, name, email, date, subject, body = fields[:7]
        commits.append(
            CommitRecord(
                sha=sha,
                parents=parents.split(),
                subject=subject,
                body=body.strip() or None,
                author=Author(name=name or None, email=email or None),
                date=date or None,
            )
        )
    return commits


def build_commit_digraph(commits: list[CommitRecord]) -> nx.DiGraph:
    """Build a child -> parent graph of the identified commits.

    Parents that are not part of the history are added as nodes with
    ``missing=True``. Commits without an identifier get no node, but their
    missing parents are still recorded.

    Args:
        commits: Commits in display order.

    Returns:
        NetworkX DiGraph with an edge from every commit to each of its parents.
    """
    G = nx.DiGraph()

    for row, commit in enumerate(commits):
        if commit.sha is not None and commit.sha not in G:
            G.add_node(commit.sha, row=row, missing=False)

    for commit in commits:
        for parent in commit.parents:
            if parent not in G:
                G.add_node(parent, missing=True)
            if commit.sha is not None:
                G.add_edge(commit.sha, parent)

    return G


def summarize_history(commits: list[CommitRecord]) -> HistoryStats:
    """Compute summary statistics for a commit history.

    Args:
        commits: Commits in display order.

    Returns:
        HistoryStats for the history.
    """
    stats = HistoryStats(commits=len(commits))
    stats.merges = sum(1 for c in commits if len(c.parents) > 1)
    stats.roots = sum(1 for c in commits if not c.parents)
    stats.anonymous = sum(1 for c in commits if c.sha is None)

    G = build_commit_digraph(commits)
    present = [n for n, missing in G.nodes(data="missing") if not missing]
    stats.missing_parents = G.number_of_nodes() - len(present)

    history = G.subgraph(present)
    stats.acyclic = nx.is_directed_acyclic_graph(history)
    if stats.acyclic:
        # Path length counts edges, the chain counts commits
        stats.longest_chain = nx.dag_longest_path_length(history) + 1 if present else 0

    return stats
