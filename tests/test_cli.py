"""Smoke tests for the Typer CLI router."""
import json

import pytest
from typer.testing import CliRunner

from distomeasure.cli.main import app
from distomeasure.config import reset_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    monkeypatch.delenv("DISTOMEASURE_CONFIG_FILE", raising=False)
    monkeypatch.delenv("DISTOMEASURE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("DISTOMEASURE_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("DISTOMEASURE_LOG_PATH", str(tmp_path / "events.jsonl"))
    monkeypatch.delenv("DISTOMEASURE_DRAFTS_DIR", raising=False)
    monkeypatch.delenv("DISTOMEASURE_EXPORT_DIR", raising=False)
    reset_settings()
    yield
    reset_settings()


def test_help_shows_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("parse", "format", "new", "commit", "summary", "export", "draft", "config"):
        assert command in result.stdout


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "distomeasure" in result.stdout


def test_parse_command() -> None:
    result = runner.invoke(app, ["parse", "5' 3 1/4\"", "--units", "mm"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["form"] == "feet_inches"
    assert payload["units"] == "mm"
    assert payload["value"] == pytest.approx(1606.55)
    assert payload["display"] == "1606.55"


def test_parse_command_unparseable() -> None:
    result = runner.invoke(app, ["parse", "abc"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["value"] is None
    assert payload["form"] is None


def test_format_command() -> None:
    result = runner.invoke(app, ["format", "5.1205"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "5.121"


def test_new_commit_summary_flow(tmp_path) -> None:
    job_file = tmp_path / "job.json"
    result = runner.invoke(app, ["new", "--output", str(job_file), "--job-number", "J-42"])
    assert result.exit_code == 0
    window_id = json.loads(result.stdout)["window_id"]

    for path, raw in (("width.top", "52.125"), ("width.mid", "51 15/16"), ("width.bottom", "52mm")):
        result = runner.invoke(app, ["commit", str(job_file), window_id, path, raw])
        assert result.exit_code == 0, result.stdout

    payload = json.loads(result.stdout)
    assert payload["text"] == "2.047"
    assert payload["normalized"] is True
    assert payload["summary"]["min_width_label"] == "Min width: 2.047 in"

    stored = json.loads(job_file.read_text(encoding="utf-8"))
    assert stored["windows"][0]["width"] == {"top": "52.125", "mid": "51.938", "bottom": "2.047"}

    result = runner.invoke(app, ["summary", str(job_file)])
    assert result.exit_code == 0
    (summary,) = json.loads(result.stdout)
    assert summary["highlighted_paths"] == ["width.bottom"]
    assert summary["min_height_label"] == "Min height: —"

    events = [json.loads(line)["event"] for line in (tmp_path / "events.jsonl").read_text(encoding="utf-8").splitlines()]
    assert "commit.completed" in events
    assert "summary.completed" in events


def test_commit_errors(tmp_path) -> None:
    job_file = tmp_path / "job.json"
    result = runner.invoke(app, ["new", "--output", str(job_file)])
    window_id = json.loads(result.stdout)["window_id"]

    assert runner.invoke(app, ["commit", str(job_file), "missing", "width.top", "1"]).exit_code == 1
    assert runner.invoke(app, ["commit", str(job_file), window_id, "width.diagonal", "1"]).exit_code == 1
    assert runner.invoke(app, ["commit", str(job_file), window_id, "splitCount", "9"]).exit_code == 1


def test_summary_write_and_export(tmp_path) -> None:
    job_file = tmp_path / "job.json"
    job_file.write_text(
        json.dumps(
            {
                "job": {"job_number": "J/7", "units": "mm"},
                "windows": [{"id": "w1", "width": {"top": "1,2m", "mid": "1199"}, "height": {"left": "2 m"}}],
            }
        ),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["summary", str(job_file), "--write"])
    assert result.exit_code == 0
    stored = json.loads(job_file.read_text(encoding="utf-8"))
    assert stored["windows"][0]["width"]["top"] == "1200"
    assert stored["windows"][0]["height"]["left"] == "2000"

    out_dir = tmp_path / "exports"
    result = runner.invoke(app, ["export", str(job_file), "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    exported = out_dir / "J_7.json"
    assert json.loads(result.stdout)["output"] == str(exported)
    assert json.loads(exported.read_text(encoding="utf-8"))["job"]["units"] == "mm"


def test_invalid_job_file(tmp_path) -> None:
    job_file = tmp_path / "job.json"
    job_file.write_text("{broken", encoding="utf-8")
    assert runner.invoke(app, ["summary", str(job_file)]).exit_code == 1


def test_draft_commands(tmp_path) -> None:
    job_file = tmp_path / "job.json"
    runner.invoke(app, ["new", "--output", str(job_file), "--job-number", "J-9"])
    drafts = tmp_path / "drafts"

    result = runner.invoke(app, ["draft", "save", str(job_file), "--drafts-dir", str(drafts)])
    assert result.exit_code == 0

    result = runner.invoke(app, ["draft", "load", "J-9", "--drafts-dir", str(drafts)])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["job"]["job_number"] == "J-9"

    result = runner.invoke(app, ["draft", "clear", "J-9", "--drafts-dir", str(drafts)])
    assert json.loads(result.stdout)["removed"] is True
    assert runner.invoke(app, ["draft", "load", "J-9", "--drafts-dir", str(drafts)]).exit_code == 1


def test_config_paths(tmp_path) -> None:
    result = runner.invoke(app, ["config", "paths", "--refresh"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["config_source"] == "environment"
    assert payload["settings"]["home"] == str((tmp_path / "home").resolve())
    assert payload["paths"]["drafts_dir"]["kind"] == "missing"
