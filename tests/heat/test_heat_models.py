"""Tests for heat data models."""

import dataclasses

import pytest

from firesight.heat.models import FileNode, HeatScore, NodeType


class TestHeatScore:
    def test_is_frozen(self):
        score = HeatScore(path="a.py", score=10.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            score.score = 20.0  # type: ignore[misc]

    def test_defaults(self):
        score = HeatScore(path="a.py", score=10.0)
        assert score.change_frequency == 0.0
        assert score.days_since_edit == 0
        assert score.total_file_changes == 0


class TestFileNode:
    def test_node_type_is_str(self):
        assert NodeType.FILE == "file"
        assert NodeType.FOLDER.value == "folder"

    def test_score_without_heat(self):
        node = FileNode(id="x", name="x", path="x", type=NodeType.FOLDER)
        assert node.score == 0.0
        assert node.total_file_changes == 0

    def test_walk_and_files(self):
        leaf = FileNode(
            id="b",
            name="b.py",
            path="a/b.py",
            type=NodeType.FILE,
            heat_score=HeatScore(path="a/b.py", score=3.0, total_file_changes=2),
        )
        folder = FileNode(id="a", name="a", path="a", type=NodeType.FOLDER, children=[leaf])
        assert [n.path for n in folder.walk()] == ["a", "a/b.py"]
        assert folder.files() == [leaf]
        assert leaf.score == 3.0
        assert leaf.total_file_changes == 2
