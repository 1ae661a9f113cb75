from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..pipes.base import Pipeline
from ..pipes.browser import Browser
from ..pipes.registry import load_pipes
from .config import BuildConfig
from .manifest import ManifestGenerator, manifest_generator


@dataclass
class BuildContext:
    """Everything a task body needs, wired once at startup."""

    config: BuildConfig
    pipes: Dict[str, Pipeline]
    manifest: ManifestGenerator
    browser: Browser = field(default_factory=Browser)


def build_context(config: BuildConfig, browser: Browser | None = None) -> BuildContext:
    return BuildContext(
        config=config,
        pipes=load_pipes(config.pipes),
        manifest=manifest_generator(config),
        browser=browser or Browser(),
    )
