"""Application manifest embedded into HTML pages."""

from __future__ import annotations

import json
from typing import Callable

from .config import BuildConfig


MANIFEST_TOKEN = "@@appManifest"

ManifestGenerator = Callable[[], str]


def manifest_generator(config: BuildConfig) -> ManifestGenerator:
    data = dict(config.manifest)

    def generate() -> str:
        return json.dumps(data, sort_keys=True)

    return generate


def app_manifest_statement(generator: ManifestGenerator) -> str:
    return "quasar.global.manifest = " + generator() + ";"
