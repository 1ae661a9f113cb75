"""Transformation plugins ("pipes") used by the build tasks.

Each asset type maps to a `Pipeline` implementation exposing `lint()` and
`compile(options)`, both returning stream transforms.
"""

from .base import CompileOptions, LintError, Pipeline

__all__ = ["CompileOptions", "LintError", "Pipeline"]
