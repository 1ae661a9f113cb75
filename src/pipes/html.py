from __future__ import annotations

from typing import Iterator

from ..orchestrator.stream import AssetFile, Transform
from .base import CompileOptions, Pipeline
from .minify import minify_html


class HtmlPipe(Pipeline):
    name = "html"

    def compile(self, options: CompileOptions) -> Transform:
        def _compile(files: Iterator[AssetFile]) -> Iterator[AssetFile]:
            for f in files:
                if options.production:
                    f = f.replace_text(minify_html(f.text))
                yield f

        return _compile
