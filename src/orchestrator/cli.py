from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import List

import typer
import yaml
from dotenv import load_dotenv

from .core import Runner, TaskError
from .logging import configure_logging, get_logger

load_dotenv()

app = typer.Typer(add_completion=False, help="Front-end asset build tasks")
log = get_logger("orchestrator.cli")


def load_config(path: str | Path) -> dict:
    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def discover_tasks(runner: Runner, ctx) -> list[str]:
    """Import all modules in `tasks` package and let each register its tasks."""
    tasks_pkg = "src.tasks"
    registered: list[str] = []
    pkg = importlib.import_module(tasks_pkg)
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{tasks_pkg}."):
        mod = importlib.import_module(m.name)
        register = getattr(mod, "register", None)
        if callable(register):
            register(runner, ctx)
            registered.append(m.name)
    log.debug("Task modules: %s", ", ".join(registered))
    return registered


def build_runner(config: str | Path) -> tuple[Runner, object]:
    from ..tasks.config import BuildConfig
    from ..tasks.context import build_context

    params = load_config(config)
    build_config = BuildConfig.from_dict(params)
    if build_config.log_file:
        configure_logging(log_file=build_config.resolve(build_config.log_file))
    ctx = build_context(build_config)
    runner = Runner(name="build")
    discover_tasks(runner, ctx)
    return runner, ctx


def _load_or_exit(config: str) -> tuple[Runner, object]:
    try:
        return build_runner(config)
    except FileNotFoundError as e:
        typer.echo(f"Config not found: {e.filename or config}", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Invalid config: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("list")
def list_tasks(
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
):
    """List registered tasks and their dependencies."""
    runner, _ = _load_or_exit(config)
    typer.echo("Registered tasks:")
    for name, spec in runner.tasks.items():
        deps = f" (after {', '.join(spec.deps)})" if spec.deps else ""
        typer.echo(f"- {name}{deps}")


@app.command()
def run(
    tasks: List[str] = typer.Argument(..., help="Task names to run, e.g. js:dev"),
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
    runs_dir: str = typer.Option("", help="Write run state under this directory"),
):
    """Run tasks (and their dependencies) by name."""
    runner, ctx = _load_or_exit(config)
    state_dir = runs_dir or ctx.config.runs_dir
    try:
        runner.run(tasks, runs_dir=ctx.config.resolve(state_dir) if state_dir else None)
    except KeyError as e:
        typer.echo(e.args[0], err=True)
        raise typer.Exit(code=1)
    except TaskError as e:
        typer.echo(str(e), err=True)
        for name, err in e.failed.items():
            typer.echo(f"  {name}: {err}", err=True)
        raise typer.Exit(code=1)


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
