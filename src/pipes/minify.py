"""Conservative text minifiers for production builds.

These only strip block comments, full-line comments and redundant whitespace.
They never touch string contents on the same line as code.
"""

from __future__ import annotations

import re


_BLOCK_COMMENT = re.compile(r"/\*(?!!).*?\*/", re.DOTALL)
_HTML_COMMENT = re.compile(r"<!--(?!\[if).*?-->", re.DOTALL)
_CSS_PUNCT = re.compile(r"\s*([{};:,>])\s*")
_BETWEEN_TAGS = re.compile(r">\s+<")


def _squeeze_lines(text: str, line_comment: str | None = None) -> str:
    out: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if line_comment and stripped.startswith(line_comment):
            continue
        out.append(stripped)
    return "\n".join(out) + ("\n" if out else "")


def minify_js(text: str) -> str:
    return _squeeze_lines(_BLOCK_COMMENT.sub("", text), line_comment="//")


def minify_css(text: str) -> str:
    text = _BLOCK_COMMENT.sub("", text)
    text = " ".join(text.split())
    text = _CSS_PUNCT.sub(r"\1", text)
    return text.replace(";}", "}")


def minify_html(text: str) -> str:
    text = _HTML_COMMENT.sub("", text)
    text = _squeeze_lines(text)
    return _BETWEEN_TAGS.sub("><", text.replace("\n", " ")).strip()
