# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from src.orchestrator.core import Runner
from src.pipes.browser import Browser
from src.tasks.compile import register
from src.tasks.config import BuildConfig
from src.tasks.context import BuildContext

from .fakes import RecordingPipe


SOURCES = {
    "app/js/main.js": "// @@appManifest\nvar a = 1;\n",
    "app/js/lib/util.js": "export function util() {\n  return 2;\n}\n",
    "app/css/site.css": "body {\n  color: red;\n}\n",
    "app/index.html": "<html>\n<script>@@appManifest</script>\n</html>\n",
}


def write_tree(root: Path, files: dict[str, str]) -> None:
    for rel, text in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")


@pytest.fixture()
def params() -> dict:
    return {
        "base": "app",
        "js": {"src": ["app/js/**/*.js"], "dest": "dist"},
        "css": {"src": ["app/css/*.css"], "dest": "dist"},
        "html": {"src": ["app/*.html"], "dest": "dist"},
        "lint": {"js": ["app/js/**/*.js"], "css": "app/css/*.css"},
        "webpack": {"banner": "/* test */"},
        "manifest": {"name": "demo"},
    }


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    write_tree(tmp_path, SOURCES)
    return tmp_path


@pytest.fixture()
def config(project: Path, params: dict) -> BuildConfig:
    return BuildConfig.from_dict(params, root=project)


@pytest.fixture()
def pipes() -> dict[str, RecordingPipe]:
    return {t: RecordingPipe(t) for t in ("js", "css", "html")}


@pytest.fixture()
def ctx(config: BuildConfig, pipes: dict[str, RecordingPipe]) -> BuildContext:
    """
    BuildContext wired with recording pipes and a fixed manifest.
    """
    return BuildContext(config=config, pipes=pipes, manifest=lambda: "{}", browser=Browser())


@pytest.fixture()
def runner(ctx: BuildContext) -> Runner:
    r = Runner(name="test")
    register(r, ctx)
    return r
