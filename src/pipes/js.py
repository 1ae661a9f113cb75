"""Built-in JavaScript pipe.

Compiles without a real bundler: files pass through one by one, optionally
minified, with an optional banner taken from the bundler settings.
"""

from __future__ import annotations

from typing import Iterator

from ..orchestrator.logging import get_logger
from ..orchestrator.stream import AssetFile, Transform
from .base import CompileOptions, Pipeline
from .lint import LineLinter
from .minify import minify_js


class JsPipe(Pipeline):
    name = "js"

    def __init__(self, **lint_rules):
        self.lint_rules = lint_rules
        self.logger = get_logger("pipes.js")

    def lint(self) -> Transform:
        return LineLinter(self.name, **self.lint_rules)

    def compile(self, options: CompileOptions) -> Transform:
        banner = options.bundler.get("banner") if options.bundler else None

        def _compile(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
            for f in files:
                text = f.text
                if options.production:
                    text = minify_js(text)
                if banner:
                    text = f"{banner}\n{text}"
                out = f.replace_text(text)
                if not options.retain_path:
                    out = out.moved_to(out.base, out.path.name)
                self.logger.debug("Compiled %s", out.relative)
                yield out

        return _compile
