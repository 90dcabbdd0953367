import json

import pytest
from helpers import ScriptedBackend, issue_json, reply_text
from typer.testing import CliRunner

from localspy import __version__, cli
from localspy.errors import BackendError
from localspy.reviewer import reviewer as reviewer_module

runner = CliRunner()


@pytest.fixture
def scripted(monkeypatch):
    """Make every pipeline built by the CLI use a scripted backend."""
    backend = ScriptedBackend(
        {"a.ts": reply_text(issue_json()), "b.py": "I cannot review this"}
    )
    original_init = reviewer_module.ReviewPipeline.__init__

    def init(self, config, backend_=None, settings=None, **kwargs):
        original_init(self, config, backend=backend, settings=settings)

    monkeypatch.setattr(reviewer_module.ReviewPipeline, "__init__", init)
    return backend


def write_config(path, **overrides):
    data = {
        "model": "codellama:7b",
        "temperature": 0.1,
        "max_tokens": 100,
        "include_patterns": ["**/*.{ts,py}"],
        "exclude_patterns": [],
        "review_types": ["security", "bugs"],
        "output_format": "json",
        "severity": "all",
    }
    data.update(overrides)
    path.write_text(json.dumps(data))
    return path


def test_version():
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_init_creates_config_once(tmp_path):
    target = tmp_path / "localspy.yaml"
    result = runner.invoke(cli.app, ["init", str(target)])
    assert result.exit_code == 0
    assert target.exists()

    again = runner.invoke(cli.app, ["init", str(target)])
    assert again.exit_code == 0
    assert "already exists" in again.stdout


def test_review_outputs_json(project, scripted):
    config = write_config(project / "review.json")
    result = runner.invoke(cli.app, ["review", str(project), "--config", str(config)])

    assert result.exit_code == 0, result.output
    start = result.stdout.index("{")
    data = json.loads(result.stdout[start:])
    assert data["summary"]["totalFiles"] == 2
    assert data["summary"]["issuesByType"] == {"security": 1, "bugs": 1}


def test_review_severity_override(project, scripted, tmp_path):
    config = write_config(project / "review.json")
    report = tmp_path / "report.json"
    result = runner.invoke(
        cli.app,
        ["review", str(project), "-c", str(config), "--severity", "high", "--save", str(report)],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(report.read_text())
    assert data["summary"]["totalIssues"] == 1
    assert data["summary"]["issuesBySeverity"] == {"high": 1}


def test_review_saves_markdown(project, scripted, tmp_path):
    config = write_config(project / "review.json")
    report = tmp_path / "report.md"
    result = runner.invoke(
        cli.app, ["review", str(project), "-c", str(config), "-o", "markdown", "--save", str(report)]
    )
    assert result.exit_code == 0, result.output
    assert report.read_text().startswith("# AI Code Review Report")


def test_review_invalid_config_exits_with_message(project, scripted):
    config = write_config(project / "review.json", severity="critical")
    result = runner.invoke(cli.app, ["review", str(project), "-c", str(config)])
    assert result.exit_code == 1
    assert "Configuration error" in result.output
    assert scripted.prompts == []


def test_review_invalid_option_exits_with_message(project, scripted):
    config = write_config(project / "review.json")
    result = runner.invoke(cli.app, ["review", str(project), "-c", str(config), "-o", "pdf"])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_review_model_unavailable_exits(project, scripted):
    scripted.installed = []
    scripted.pull_error = BackendError("connection refused")
    config = write_config(project / "review.json")
    result = runner.invoke(cli.app, ["review", str(project), "-c", str(config)])
    assert result.exit_code == 1
    assert "Model unavailable" in result.output


def test_review_missing_directory(tmp_path, scripted):
    config = write_config(tmp_path / "review.json")
    result = runner.invoke(cli.app, ["review", str(tmp_path / "nope"), "-c", str(config)])
    assert result.exit_code == 1
    assert "Directory does not exist" in result.output


def test_config_command(tmp_path):
    config = write_config(tmp_path / "review.json", model="deepseek-coder:6.7b")
    result = runner.invoke(cli.app, ["config", "-c", str(config)])
    assert result.exit_code == 0
    assert "deepseek-coder:6.7b" in result.stdout
