"""Tests for vertices.py module."""

from commit_lanes.graph import CommitRecord
from commit_lanes.layout.geometry import Point
from commit_lanes.layout.vertices import MISSING_PARENT, Slot, Vertex, build_vertices

from conftest import commits_from


class TestBuildVertices:
    """Tests for build_vertices function."""

    def test_one_vertex_per_commit(self, merge_history):
        """Every commit gets a vertex keyed by its row."""
        vertices = build_vertices(merge_history)

        assert [v.row for v in vertices] == [0, 1, 2, 3]

    def test_parents_keep_order(self, merge_history):
        """Parent indices follow the commit's parent order."""
        vertices = build_vertices(merge_history)

        assert vertices[0].parents == [1, 2]
        assert vertices[1].parents == [3]
        assert vertices[3].parents == []

    def test_children_back_links(self, fork_history):
        """Parents record their children."""
        vertices = build_vertices(fork_history)

        assert vertices[2].children == [0, 1]
        assert vertices[0].children == []

    def test_missing_parent_maps_to_sentinel(self, truncated_history):
        """Unknown parent identifiers resolve to MISSING_PARENT."""
        vertices = build_vertices(truncated_history)

        assert vertices[0].parents == [MISSING_PARENT]
        # No vertex receives a back-link for the missing parent
        assert all(v.children == [] for v in vertices)

    def test_duplicate_identifier_first_wins(self):
        """The first commit with an identifier owns it."""
        commits = commits_from([("X", ["A"]), ("A", []), ("A", [])])
        vertices = build_vertices(commits)

        assert vertices[0].parents == [1]
        assert vertices[1].children == [0]
        assert vertices[2].children == []

    def test_anonymous_commits_not_resolvable(self):
        """Commits without identifier never match a parent reference."""
        commits = [
            CommitRecord(sha="X", parents=[""]),
            CommitRecord(sha=None, parents=[]),
            CommitRecord(sha=None, parents=[]),
        ]
        vertices = build_vertices(commits)

        assert vertices[0].parents == [MISSING_PARENT]
        assert vertices[1].children == []
        assert vertices[2].children == []

    def test_empty_history(self):
        """Empty commit list gives an empty arena."""
        assert build_vertices([]) == []


class TestVertex:
    """Tests for Vertex state handling."""

    def test_claims_are_first_fit(self):
        """Only the next free lane can be claimed."""
        vertex = Vertex(3)

        assert vertex.next_point() == Point(0, 3)
        assert vertex.claim(0, 5, 0)
        assert not vertex.claim(0, 6, 1)  # already taken
        assert not vertex.claim(2, 6, 1)  # skips lane 1
        assert vertex.claim(1, 6, 1)

        assert vertex.slots == [Slot(5, 0), Slot(6, 1)]
        assert vertex.next_point() == Point(2, 3)

    def test_point_towards(self):
        """Finds the lane of a line heading for a target on a branch."""
        vertex = Vertex(2)
        vertex.claim(0, 7, 0)
        vertex.claim(1, 9, 1)

        assert vertex.point_towards(9, 1) == Point(1, 2)
        assert vertex.point_towards(9, 0) is None
        assert vertex.point_towards(4, 1) is None

    def test_place_is_permanent(self):
        """A placed vertex keeps its first branch and lane."""
        vertex = Vertex(0)
        vertex.place(0, 2)
        vertex.place(1, 0)

        assert vertex.branch == 0
        assert vertex.point() == Point(2, 0)

    def test_parent_cursor(self):
        """pending_parent walks the parents in order."""
        vertex = Vertex(0, parents=[4, MISSING_PARENT])

        assert vertex.is_merge
        assert vertex.pending_parent() == 4
        vertex.parent_processed()
        assert vertex.pending_parent() == MISSING_PARENT
        vertex.parent_processed()
        assert vertex.pending_parent() is None
