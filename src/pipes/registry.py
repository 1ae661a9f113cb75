from __future__ import annotations

import importlib
from typing import Any, Dict, Mapping

from .base import Pipeline


DEFAULT_PIPES: Dict[str, str] = {
    "js": "src.pipes.js:JsPipe",
    "css": "src.pipes.css:CssPipe",
    "html": "src.pipes.html:HtmlPipe",
}


def load_object(path: str) -> Any:
    """Import `package.module:attr` (or `package.module.attr`)."""
    if ":" in path:
        module_name, attr = path.split(":", 1)
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ImportError(f"Not a dotted object path: {path!r}")
    mod = importlib.import_module(module_name)
    return getattr(mod, attr)


def load_pipes(spec: Mapping[str, Any] | None = None) -> Dict[str, Pipeline]:
    """Build the asset type -> Pipeline mapping.

    Entries are either a dotted path or a mapping with `class` and optional
    `options` (keyword arguments for the constructor). Types not configured
    fall back to the built-in pipes.
    """
    merged: Dict[str, Any] = dict(DEFAULT_PIPES)
    merged.update(spec or {})
    pipes: Dict[str, Pipeline] = {}
    for type_name, entry in merged.items():
        if isinstance(entry, Mapping):
            path = entry.get("class") or DEFAULT_PIPES.get(type_name)
            options = dict(entry.get("options") or {})
        else:
            path, options = entry, {}
        if not path:
            raise ValueError(f"No pipe class configured for type {type_name!r}")
        cls = load_object(str(path))
        pipe = cls(**options)
        if not isinstance(pipe, Pipeline):
            raise TypeError(f"{path} is not a Pipeline")
        pipes[type_name] = pipe
    return pipes
