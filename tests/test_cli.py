# tests/test_cli.py

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from src.orchestrator.cli import app


@pytest.fixture()
def config_file(project: Path, params: dict, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(project)
    path = project / "build.yaml"
    path.write_text(yaml.safe_dump(params), encoding="utf-8")
    return path


def test_list_shows_tasks(config_file: Path) -> None:
    result = CliRunner().invoke(app, ["list", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "- js:dev (after js:lint)" in result.output
    assert "- html:prod\n" in result.output


def test_run_prod_builds_everything(config_file: Path, project: Path) -> None:
    result = CliRunner().invoke(
        app,
        ["run", "js:prod", "css:prod", "html:prod", "--config", str(config_file), "--runs-dir", "runs"],
    )

    assert result.exit_code == 0, result.output
    dist = project / "dist"
    assert (dist / "js" / "main.js").read_text(encoding="utf-8") == "/* test */\nvar a = 1;\n"
    assert (dist / "js" / "lib" / "util.js").exists()
    assert (dist / "site.css").read_text(encoding="utf-8") == "body{color:red}"
    html = (dist / "index.html").read_text(encoding="utf-8")
    assert html == '<html><script>quasar.global.manifest = {"name": "demo"};</script></html>'
    assert list((project / "runs" / "build").glob("*/state.json"))


def test_run_unknown_task(config_file: Path) -> None:
    result = CliRunner().invoke(app, ["run", "img:dev", "--config", str(config_file)])
    assert result.exit_code == 1


def test_run_lint_failure_exits_nonzero(config_file: Path, project: Path) -> None:
    (project / "app" / "css" / "site.css").write_text("body {\tcolor: red; }  \n", encoding="utf-8")

    result = CliRunner().invoke(app, ["run", "css:dev", "--config", str(config_file)])

    assert result.exit_code == 1
    assert not (project / "dist").exists()


def test_missing_config(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["list", "--config", str(tmp_path / "none.yaml")])
    assert result.exit_code == 1
