"""Line-based lint rules shared by the built-in pipes."""

from __future__ import annotations

from typing import Iterator

from ..orchestrator.logging import get_logger
from ..orchestrator.stream import AssetFile
from .base import LintError


class LineLinter:
    def __init__(
        self,
        name: str,
        max_line_length: int = 120,
        trailing_whitespace: bool = True,
        tabs: bool = True,
    ):
        self.name = name
        self.max_line_length = max_line_length
        self.trailing_whitespace = trailing_whitespace
        self.tabs = tabs
        self.logger = get_logger(f"pipes.{name}.lint")

    def check(self, f: AssetFile) -> list[str]:
        problems: list[str] = []
        for lineno, line in enumerate(f.text.splitlines(), start=1):
            where = f"{f.relative}:{lineno}"
            if self.max_line_length and len(line) > self.max_line_length:
                problems.append(
                    f"{where}: line too long ({len(line)} > {self.max_line_length})"
                )
            if self.trailing_whitespace and line != line.rstrip():
                problems.append(f"{where}: trailing whitespace")
            if self.tabs and "\t" in line:
                problems.append(f"{where}: hard tab")
        return problems

    def __call__(self, files: Iterator[AssetFile]) -> Iterator[AssetFile]:
        violations: list[str] = []
        checked = 0
        for f in files:
            checked += 1
            for problem in self.check(f):
                self.logger.warning(problem)
                violations.append(problem)
            yield f
        if violations:
            raise LintError(violations)
        self.logger.info("%d file(s) clean", checked)
