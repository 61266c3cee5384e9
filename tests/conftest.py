"""Pytest fixtures for commit-lanes tests."""

import random

import pytest

from commit_lanes.graph import CommitRecord


def commits_from(pairs: list[tuple[str | None, list[str]]]) -> list[CommitRecord]:
    return [CommitRecord(sha=sha, parents=list(parents)) for sha, parents in pairs]


@pytest.fixture
def single_commit() -> list[CommitRecord]:
    """One root commit."""
    return commits_from([("A", [])])


@pytest.fixture
def linear_chain() -> list[CommitRecord]:
    """A -> B -> C, newest first."""
    return commits_from([("A", ["B"]), ("B", ["C"]), ("C", [])])


@pytest.fixture
def fork_history() -> list[CommitRecord]:
    """A and D both have parent B."""
    return commits_from([("A", ["B"]), ("D", ["B"]), ("B", [])])


@pytest.fixture
def merge_history() -> list[CommitRecord]:
    """M merges A and B, which both branch off C."""
    return commits_from([("M", ["A", "B"]), ("A", ["C"]), ("B", ["C"]), ("C", [])])


@pytest.fixture
def merge_join_history() -> list[CommitRecord]:
    """M's second parent C is already placed when M is revisited.

    A's branch runs down lane 0 to C; M sits on lane 1 with first parent B.
    """
    return commits_from([("A", ["C"]), ("M", ["B", "C"]), ("B", ["C"]), ("C", [])])


@pytest.fixture
def truncated_history() -> list[CommitRecord]:
    """A's parent is not part of the list; B is an unrelated root."""
    return commits_from([("A", ["gone"]), ("B", [])])


def generate_history(seed: int, size: int = 40) -> list[CommitRecord]:
    """Random newest-first history with merges, roots and missing parents."""
    rng = random.Random(seed)
    shas = [f"c{i}" for i in range(size)]
    commits = []
    for row, sha in enumerate(shas):
        later = shas[row + 1 :]
        parents: list[str] = []
        roll = rng.random()
        if later and roll < 0.7:
            parents.append(rng.choice(later[:5]))
        elif later and roll < 0.9:
            parents.extend(rng.sample(later[:8], min(2, len(later[:8]))))
        elif roll < 0.95:
            parents.append(f"missing-{row}")
        commits.append(CommitRecord(sha=sha, parents=parents))
    return commits


@pytest.fixture(params=range(8))
def random_history(request) -> list[CommitRecord]:
    """Several deterministic pseudo-random histories."""
    return generate_history(request.param)
