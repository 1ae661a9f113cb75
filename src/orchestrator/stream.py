"""File streams for build tasks.

A `Stream` is a lazy chain of generators over `AssetFile` objects. Sources are
read one file at a time, so each file flows through every transform before the
next one is read. Errors raised by any transform surface when the stream is
drained.
"""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass, replace as dc_replace
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Union


GLOB_CHARS = "*?["


@dataclass(frozen=True)
class AssetFile:
    path: Path
    base: Path
    contents: bytes

    @property
    def relative(self) -> Path:
        return Path(os.path.relpath(self.path, self.base))

    @property
    def text(self) -> str:
        return self.contents.decode("utf-8")

    def replace_text(self, text: str) -> "AssetFile":
        return dc_replace(self, contents=text.encode("utf-8"))

    def moved_to(self, base: Path, relative: Path | str | None = None) -> "AssetFile":
        rel = Path(relative) if relative is not None else self.relative
        return dc_replace(self, path=Path(base) / rel, base=Path(base))


Transform = Callable[[Iterator[AssetFile]], Iterator[AssetFile]]
Patterns = Union[str, List[str]]


class Stream:
    def __init__(self, files: Iterable[AssetFile]):
        self._files = files

    def pipe(self, transform: Transform) -> "Stream":
        return Stream(transform(iter(self._files)))

    def __iter__(self) -> Iterator[AssetFile]:
        return iter(self._files)

    def run(self) -> list[AssetFile]:
        """Drain the stream, returning every file that reached the end."""
        return list(self)


def identity(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
    yield from files


def if_then(condition: bool, transform: Transform) -> Transform:
    return transform if condition else identity


def replace(token: str, replacement: str) -> Transform:
    """Replace every literal occurrence of `token` in each file's text."""

    def _replace(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
        for f in files:
            text = f.text
            if token in text:
                f = f.replace_text(text.replace(token, replacement))
            yield f

    return _replace


def glob_parent(pattern: str) -> Path:
    parts: list[str] = []
    for part in Path(pattern).parts:
        if any(ch in part for ch in GLOB_CHARS):
            break
        parts.append(part)
    else:
        # Literal path: its parent directory is the base
        return Path(*parts).parent if parts else Path(".")
    return Path(*parts) if parts else Path(".")


def _expand(pattern: str, cwd: Path) -> list[Path]:
    if not any(ch in pattern for ch in GLOB_CHARS):
        p = cwd / pattern
        if not p.is_file():
            raise FileNotFoundError(f"File not found with singular glob: {p}")
        return [p]
    # Hidden files are skipped, and `**` matches zero or more directories
    found = glob.glob(pattern, root_dir=cwd, recursive=True)
    return [cwd / m for m in sorted(found) if (cwd / m).is_file()]


def _select(patterns: Patterns, cwd: Path) -> dict[Path, Path]:
    """Map each selected file to the glob parent of the pattern that found it."""
    if isinstance(patterns, str):
        patterns = [patterns]
    selected: dict[Path, Path] = {}
    for pat in patterns:
        if pat.startswith("!"):
            excluded = set(glob.glob(pat[1:], root_dir=cwd, recursive=True))
            for p in list(selected):
                if os.path.relpath(p, cwd) in excluded or str(p) in excluded:
                    del selected[p]
            continue
        parent = cwd / glob_parent(pat)
        for p in _expand(pat, cwd):
            selected.setdefault(p, parent)
    return selected


def resolve_sources(patterns: Patterns, cwd: Path | str | None = None) -> list[Path]:
    """Expand ordered glob patterns; `!pattern` removes earlier matches."""
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    return list(_select(patterns, cwd))


def src(
    patterns: Patterns,
    base: Path | str | None = None,
    cwd: Path | str | None = None,
) -> Stream:
    """Stream files matching `patterns`.

    Without `base`, each file is based on the glob parent of the pattern that
    matched it.
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    base_path = None
    if base is not None:
        base_path = Path(base) if Path(base).is_absolute() else cwd / base
    selected = _select(patterns, cwd)

    def _read() -> Iterator[AssetFile]:
        for p, parent in selected.items():
            yield AssetFile(
                path=p, base=base_path or parent, contents=p.read_bytes()
            )

    return Stream(_read())


def dest(directory: Path | str) -> Transform:
    out_dir = Path(directory)

    def _write(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
        for f in files:
            written = f.moved_to(out_dir)
            written.path.parent.mkdir(parents=True, exist_ok=True)
            written.path.write_bytes(written.contents)
            yield written

    return _write
