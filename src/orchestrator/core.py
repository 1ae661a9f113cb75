from __future__ import annotations

import json
import os
import sys
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable

from .logging import get_logger
from .stream import Stream


@dataclass
class TaskSpec:
    name: str
    deps: tuple[str, ...]
    fn: Callable[[], Any]


@dataclass
class StepResult:
    name: str
    status: str
    duration: float = 0.0
    files: int | None = None
    error: str | None = None


class TaskError(RuntimeError):
    """Raised after a run in which one or more tasks failed."""

    def __init__(self, failed: dict[str, BaseException]):
        self.failed = failed
        names = ", ".join(failed)
        super().__init__(f"Task(s) failed: {names}")


def topo_sort(nodes: Iterable[str], edges: Iterable[tuple[str, str]]) -> list[str]:
    nodes = list(nodes)
    incoming = {n: set() for n in nodes}
    outgoing = {n: [] for n in nodes}
    for u, v in edges:
        if u not in incoming or v not in incoming:
            raise ValueError(f"Edge references unknown node: {(u, v)}")
        outgoing[u].append(v)
        incoming[v].add(u)
    ordered: list[str] = []
    roots = deque(n for n in nodes if not incoming[n])
    while roots:
        n = roots.popleft()
        ordered.append(n)
        for m in outgoing[n]:
            incoming[m].discard(n)
            if not incoming[m]:
                roots.append(m)
    if len(ordered) != len(nodes):
        raise ValueError("Cycle detected in task graph")
    return ordered


def settle(result: Any) -> int | None:
    """Wait for a task body's result; returns the file count for streams."""
    if result is None:
        return None
    if isinstance(result, Stream):
        return len(result.run())
    if isinstance(result, (str, bytes)):
        return None
    if hasattr(result, "__iter__"):
        count = 0
        for _ in result:
            count += 1
        return count
    return None


class Runner:
    def __init__(self, name: str = "build"):
        self.name = name
        self.tasks: dict[str, TaskSpec] = {}
        self.logger = get_logger(f"orchestrator.{self.name}")

    def task(
        self,
        name: str,
        deps: Iterable[str] = (),
        fn: Callable[[], Any] | None = None,
    ):
        """Register a task. Without `fn`, returns a decorator."""

        def deco(body: Callable[[], Any]):
            if name in self.tasks:
                raise ValueError(f"Task already registered: {name}")
            self.tasks[name] = TaskSpec(name=name, deps=tuple(deps), fn=body)
            return body

        if fn is None:
            return deco
        return deco(fn)

    def plan(self, targets: Iterable[str]) -> list[str]:
        """Dependency closure of `targets` in execution order."""
        closure: dict[str, None] = {}
        pending = deque(targets)
        while pending:
            name = pending.popleft()
            if name in closure:
                continue
            spec = self.tasks.get(name)
            if spec is None:
                raise KeyError(f"Unknown task: {name}")
            closure[name] = None
            for dep in spec.deps:
                if dep not in self.tasks:
                    raise ValueError(f"Task {name!r} depends on unknown task {dep!r}")
                pending.append(dep)
        edges = [(dep, n) for n in closure for dep in self.tasks[n].deps]
        return topo_sort(closure, edges)

    def run(
        self, targets: Iterable[str], runs_dir: Path | str | None = None
    ) -> list[StepResult]:
        targets = list(targets)
        run_id = time.strftime("%Y%m%d-%H%M%S")
        selected = self.plan(targets)
        self.logger.info("Selected steps: %s", " → ".join(selected))

        results: list[StepResult] = []
        failed: dict[str, BaseException] = {}
        blocked: set[str] = set()

        for step_name in selected:
            spec = self.tasks[step_name]
            step_logger = get_logger(f"orchestrator.{self.name}.{step_name}")
            bad_deps = [d for d in spec.deps if d in failed or d in blocked]
            if bad_deps:
                step_logger.warning(
                    "Skip: %s (dependency failed: %s)", step_name, ", ".join(bad_deps)
                )
                blocked.add(step_name)
                results.append(StepResult(name=step_name, status="skipped"))
                continue

            step_logger.info("Run: %s", step_name)
            start = time.perf_counter()
            try:
                files = settle(spec.fn())
            except Exception as e:  # noqa: BLE001
                duration = time.perf_counter() - start
                step_logger.exception("Step failed (%s)", step_name)
                failed[step_name] = e
                results.append(
                    StepResult(
                        name=step_name, status="error", duration=duration, error=str(e)
                    )
                )
                continue
            duration = time.perf_counter() - start
            step_logger.info("Finished: %s in %.2fs", step_name, duration)
            results.append(
                StepResult(name=step_name, status="ok", duration=duration, files=files)
            )

        if runs_dir is not None:
            run_dir = Path(runs_dir) / self.name / run_id
            os.makedirs(run_dir, exist_ok=True)
            _write_state(run_dir, self.name, run_id, results)

        if failed:
            first = next(iter(failed.values()))
            raise TaskError(failed) from first
        return results


def _write_state(run_dir: Path, name: str, run_id: str, results: list[StepResult]) -> None:
    state = {
        "pipeline": name,
        "run_id": run_id,
        "steps": [
            {k: v for k, v in r.__dict__.items() if v is not None} for r in results
        ],
        "python": sys.version,
    }
    with open(run_dir / "state.json", "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)
