from __future__ import annotations

from typing import Iterator

from ..orchestrator.logging import get_logger
from ..orchestrator.stream import AssetFile, Transform
from .base import CompileOptions, Pipeline
from .lint import LineLinter
from .minify import minify_css


class CssPipe(Pipeline):
    """Stylesheets are flattened into the destination root unless told otherwise.

    Bundler settings are accepted and ignored.
    """

    name = "css"

    def __init__(self, **lint_rules):
        self.lint_rules = lint_rules
        self.logger = get_logger("pipes.css")

    def lint(self) -> Transform:
        return LineLinter(self.name, **self.lint_rules)

    def compile(self, options: CompileOptions) -> Transform:
        def _compile(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
            for f in files:
                out = f.replace_text(minify_css(f.text)) if options.production else f
                if not options.retain_path:
                    out = out.moved_to(out.base, out.path.name)
                self.logger.debug("Compiled %s", out.relative)
                yield out

        return _compile
