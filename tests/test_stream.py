# tests/test_stream.py

from __future__ import annotations

from pathlib import Path

import pytest

from src.orchestrator.stream import (
    AssetFile,
    Stream,
    dest,
    glob_parent,
    identity,
    if_then,
    replace,
    resolve_sources,
    src,
)

from .conftest import write_tree


@pytest.fixture()
def tree(tmp_path: Path) -> Path:
    write_tree(
        tmp_path,
        {
            "app/js/main.js": "main",
            "app/js/lib/util.js": "util",
            "app/js/vendor/jq.js": "jq",
            "app/css/site.css": "css",
        },
    )
    return tmp_path


def _rel(paths: list[Path], root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


def test_glob_parent() -> None:
    assert glob_parent("app/js/**/*.js") == Path("app/js")
    assert glob_parent("app/css/site.css") == Path("app/css")
    assert glob_parent("*.js") == Path(".")


def test_double_star_matches_zero_or_more_dirs(tree: Path) -> None:
    found = resolve_sources(["app/js/**/*.js"], cwd=tree)
    assert _rel(found, tree) == [
        "app/js/lib/util.js",
        "app/js/main.js",
        "app/js/vendor/jq.js",
    ]


def test_star_stays_within_one_directory(tree: Path) -> None:
    found = resolve_sources(["app/js/*.js"], cwd=tree)
    assert _rel(found, tree) == ["app/js/main.js"]


def test_hidden_files_are_skipped(tree: Path) -> None:
    write_tree(tree, {"app/js/.eslintrc.js": "module.exports = {};"})
    found = resolve_sources(["app/js/*.js", "app/js/**/*.js"], cwd=tree)
    assert "app/js/.eslintrc.js" not in _rel(found, tree)


def test_bracket_patterns(tree: Path) -> None:
    write_tree(tree, {"app/js/]x.js": "odd"})
    found = resolve_sources(["app/js/[]m]*.js"], cwd=tree)
    assert _rel(found, tree) == ["app/js/]x.js", "app/js/main.js"]


def test_negated_patterns_exclude(tree: Path) -> None:
    found = resolve_sources(["app/js/**/*.js", "!app/js/vendor/**"], cwd=tree)
    assert _rel(found, tree) == ["app/js/lib/util.js", "app/js/main.js"]


def test_duplicates_are_dropped(tree: Path) -> None:
    found = resolve_sources(["app/js/*.js", "app/js/main.js"], cwd=tree)
    assert _rel(found, tree) == ["app/js/main.js"]


def test_missing_literal_path_raises(tree: Path) -> None:
    with pytest.raises(FileNotFoundError):
        resolve_sources(["app/js/nope.js"], cwd=tree)


def test_src_keeps_paths_relative_to_base(tree: Path) -> None:
    files = src(["app/js/**/*.js"], base="app", cwd=tree).run()
    assert [f.relative.as_posix() for f in files] == [
        "js/lib/util.js",
        "js/main.js",
        "js/vendor/jq.js",
    ]
    assert files[1].text == "main"


def test_src_defaults_base_to_glob_parent(tree: Path) -> None:
    files = src("app/css/*.css", cwd=tree).run()
    assert [f.relative.as_posix() for f in files] == ["site.css"]


def test_each_pattern_gets_its_own_base(tree: Path) -> None:
    write_tree(tree, {"lib/b.js": "b"})

    files = src(["app/js/*.js", "lib/*.js"], cwd=tree).run()

    assert [(f.base, f.relative.as_posix()) for f in files] == [
        (tree / "app/js", "main.js"),
        (tree / "lib", "b.js"),
    ]


def test_file_outside_base_is_relative_with_parent_steps(tree: Path) -> None:
    write_tree(tree, {"vendor/v.js": "v"})

    files = src(["app/js/*.js", "vendor/*.js"], base="app", cwd=tree).run()

    assert [f.relative.as_posix() for f in files] == ["js/main.js", "../vendor/v.js"]


def test_src_reads_lazily(tree: Path) -> None:
    stream = src("app/css/*.css", cwd=tree)
    (tree / "app/css/site.css").write_text("changed", encoding="utf-8")
    assert stream.run()[0].text == "changed"


def test_dest_writes_under_directory(tree: Path) -> None:
    out = tree / "dist"
    files = src(["app/js/**/*.js"], base="app", cwd=tree).pipe(dest(out)).run()

    assert (out / "js/lib/util.js").read_text(encoding="utf-8") == "util"
    assert files[0].base == out
    assert files[0].path == out / "js/lib/util.js"


def test_replace_every_occurrence(tmp_path: Path) -> None:
    f = AssetFile(path=tmp_path / "a.html", base=tmp_path, contents=b"x @@t y @@t")
    (out,) = Stream([f]).pipe(replace("@@t", "Z")).run()
    assert out.text == "x Z y Z"


def test_if_then() -> None:
    def upper(files):
        for f in files:
            yield f.replace_text(f.text.upper())

    assert if_then(False, upper) is identity
    assert if_then(True, upper) is upper
