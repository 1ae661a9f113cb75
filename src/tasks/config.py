"""Build configuration.

Parsed once from YAML (see `configs/base.yaml`) and passed explicitly to the
task modules; nothing reads it from global state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..orchestrator.utils import _get, as_list


@dataclass(frozen=True)
class AssetPaths:
    src: List[str]
    dest: str


@dataclass
class BuildConfig:
    root: Path
    base: str
    assets: Dict[str, AssetPaths]
    html: AssetPaths
    lint: Dict[str, List[str]] = field(default_factory=dict)
    webpack: Dict[str, Any] = field(default_factory=dict)
    manifest: Dict[str, Any] = field(default_factory=dict)
    pipes: Dict[str, Any] = field(default_factory=dict)
    runs_dir: Optional[str] = None
    log_file: Optional[str] = None

    def resolve(self, path: str | Path) -> Path:
        return self.root / path

    @property
    def base_path(self) -> Path:
        return self.resolve(self.base)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        root: Path | str | None = None,
        asset_types: tuple[str, ...] = ("js", "css"),
        linted_types: tuple[str, ...] | None = None,
    ) -> "BuildConfig":
        """Validate raw params and build the config.

        Every asset type plus `html` needs `src` and `dest`; every linted type
        needs patterns under `lint`.
        """
        root_path = Path(root) if root is not None else Path.cwd()
        if _get(data, "root"):
            root_path = root_path / data["root"]
        linted = asset_types if linted_types is None else linted_types

        assets = {t: _asset_paths(data, t) for t in asset_types}
        lint: Dict[str, List[str]] = {}
        for t in linted:
            patterns = as_list(_get(data, "lint", t))
            if not patterns:
                raise ValueError(f"Missing required config key: lint.{t}")
            lint[t] = patterns

        return cls(
            root=root_path,
            base=str(_get(data, "base", default=".")),
            assets=assets,
            html=_asset_paths(data, "html"),
            lint=lint,
            webpack=dict(_get(data, "webpack", default={})),
            manifest=dict(_get(data, "manifest", default={})),
            pipes=dict(_get(data, "pipes", default={})),
            runs_dir=_get(data, "project", "runs_dir"),
            log_file=_get(data, "project", "log_file"),
        )


def _asset_paths(data: Dict[str, Any], type_name: str) -> AssetPaths:
    section = _get(data, type_name)
    if not isinstance(section, dict):
        raise ValueError(f"Missing required config section: {type_name}")
    missing = [k for k in ("src", "dest") if not section.get(k)]
    if missing:
        raise ValueError(
            "Missing required config key(s): "
            + ", ".join(f"{type_name}.{k}" for k in missing)
        )
    return AssetPaths(src=as_list(section["src"]), dest=str(section["dest"]))
