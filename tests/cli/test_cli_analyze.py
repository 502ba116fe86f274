"""Tests for the ``firesight analyze`` command."""

import json

import pytest
from typer.testing import CliRunner

from conftest import NOW, make_stats
from firesight.api import HeatmapReport
from firesight.cli import app
from firesight.exceptions import NotARepositoryError
from firesight.heat.scorer import compute_heat_scores
from firesight.heat.tree import build_tree
from firesight.history.models import AnalysisResult

runner = CliRunner()


def fake_report(repo="repo", branch="main", time_range_days=180):
    stats = {
        "src/hot.py": make_stats("src/hot.py", {0: 8}, {"a": 4, "b": 4}),
        "src/cold.py": make_stats("src/cold.py", {300: 1}),
    }
    scores = compute_heat_scores(stats, now=NOW)
    result = AnalysisResult(
        repo_id="0011223344556677",
        repo_url=repo,
        branch=branch,
        analyzed_at=NOW,
        commit_count=9,
        file_stats=stats,
        time_range_days=time_range_days,
    )
    return HeatmapReport(
        result=result, heat_scores=scores, tree=build_tree(scores, stats), duration_seconds=0.1
    )


@pytest.fixture
def calls(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    recorded = []

    def fake_analyze(repo, branch=None, time_range_days=None, auth_token=None, config=None):
        recorded.append({"repo": repo, "branch": branch, "days": time_range_days})
        return fake_report(repo, branch or config.default_branch)

    monkeypatch.setattr("firesight.cli.analyze.run_analysis", fake_analyze)
    return recorded


class TestAnalyzeCommand:
    def test_json_output(self, calls):
        result = runner.invoke(app, ["analyze", "https://example.com/r.git", "--format", "json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["status"] == "complete"
        assert payload["analyzed_files"] == 2
        assert "dead_code" not in payload
        assert calls == [{"repo": "https://example.com/r.git", "branch": None, "days": None}]

    def test_json_with_dead_code(self, calls):
        result = runner.invoke(app, ["analyze", "r", "-f", "json", "--dead-code"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["dead_code"] == ["src/cold.py"]

    def test_options_are_forwarded(self, calls):
        result = runner.invoke(
            app, ["analyze", "r", "--branch", "dev", "--days", "30", "-f", "json"]
        )
        assert result.exit_code == 0, result.output
        assert calls == [{"repo": "r", "branch": "dev", "days": 30}]

    def test_rich_output(self, calls):
        result = runner.invoke(app, ["analyze", "r", "--quiet", "--dead-code"])
        assert result.exit_code == 0, result.output
        assert "hot.py" in result.stdout
        assert "Hottest" in result.stdout
        assert "Dead-code candidates" in result.stdout

    def test_unknown_format(self, calls):
        result = runner.invoke(app, ["analyze", "r", "--format", "xml"])
        assert result.exit_code == 2
        assert calls == []

    def test_errors_exit_1(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))

        def boom(*args, **kwargs):
            raise NotARepositoryError("/nowhere")

        monkeypatch.setattr("firesight.cli.analyze.run_analysis", boom)
        result = runner.invoke(app, ["analyze", "r", "-q"])
        assert result.exit_code == 1
        assert "Not a git repository" in result.stdout
