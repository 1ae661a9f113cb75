"""Small in-repo task runner for the asset build.

Provides Task and Runner primitives, dependency-ordered scheduling, lazy file
streams, and a Typer CLI.
"""

from .core import Runner, TaskError, TaskSpec  # re-export for convenience
from .stream import AssetFile, Stream, dest, src

__all__ = ["Runner", "TaskError", "TaskSpec", "AssetFile", "Stream", "dest", "src"]
