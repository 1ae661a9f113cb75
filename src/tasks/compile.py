"""Lint and compile tasks for the JS, CSS and HTML asset groups.

Per asset type in `ASSET_TYPES`:

- `<type>:lint` streams the type's lint sources through its lint pipe.
- `<type>:dev` / `<type>:prod` depend on the lint task and compile the type's
  sources unminified / minified into its destination.

HTML has no lint step. `html:dev` / `html:prod` inject the application
manifest in place of `@@appManifest` and compile the pages.

Task bodies return lazy streams; the runner drains them. Errors from any pipe
are left to propagate to the runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from ..orchestrator.core import Runner
from ..orchestrator.logging import get_logger
from ..orchestrator.stream import Stream, dest, if_then, replace, src
from ..pipes.base import CompileOptions
from .context import BuildContext
from .manifest import MANIFEST_TOKEN, app_manifest_statement


log = get_logger("tasks.compile")


@dataclass(frozen=True)
class AssetType:
    name: str
    deps: tuple[str, ...]
    retain_path: bool = False
    live_reload: bool = False


ASSET_TYPES: tuple[AssetType, ...] = (
    AssetType("js", deps=("js:lint",), retain_path=True),
    AssetType("css", deps=("css:lint",), live_reload=True),
)


def lint_assets(asset: AssetType, ctx: BuildContext) -> Stream:
    patterns = ctx.config.lint[asset.name]
    return src(patterns, cwd=ctx.config.root).pipe(ctx.pipes[asset.name].lint())


def compile_assets(asset: AssetType, production: bool, ctx: BuildContext) -> Stream:
    paths = ctx.config.assets[asset.name]
    options = CompileOptions(
        production=production,
        bundler=MappingProxyType(ctx.config.webpack),
        retain_path=asset.retain_path,
    )
    log.info(
        "Compile %s (%s) -> %s",
        asset.name,
        "prod" if production else "dev",
        paths.dest,
    )
    return (
        src(paths.src, base=ctx.config.base_path, cwd=ctx.config.root)
        .pipe(ctx.pipes[asset.name].compile(options))
        .pipe(dest(ctx.config.resolve(paths.dest)))
        .pipe(if_then(asset.live_reload, ctx.browser.stream()))
    )


def compile_html(production: bool, ctx: BuildContext) -> Stream:
    # Computed before any source is read so generator errors fail fast
    manifest = app_manifest_statement(ctx.manifest)
    paths = ctx.config.html
    return (
        src(paths.src, base=ctx.config.base_path, cwd=ctx.config.root)
        .pipe(replace(MANIFEST_TOKEN, manifest))
        .pipe(ctx.pipes["html"].compile(CompileOptions(production=production)))
        .pipe(dest(ctx.config.resolve(paths.dest)))
    )


def register(runner: Runner, ctx: BuildContext) -> None:
    for asset in ASSET_TYPES:
        _register_asset(runner, asset, ctx)

    runner.task("html:dev", fn=lambda: compile_html(False, ctx))
    runner.task("html:prod", fn=lambda: compile_html(True, ctx))


def _register_asset(runner: Runner, asset: AssetType, ctx: BuildContext) -> None:
    runner.task(f"{asset.name}:lint", fn=lambda: lint_assets(asset, ctx))
    runner.task(
        f"{asset.name}:dev",
        deps=asset.deps,
        fn=lambda: compile_assets(asset, False, ctx),
    )
    runner.task(
        f"{asset.name}:prod",
        deps=asset.deps,
        fn=lambda: compile_assets(asset, True, ctx),
    )
