from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..orchestrator.stream import Transform, identity


@dataclass(frozen=True)
class CompileOptions:
    production: bool = False
    bundler: Mapping[str, Any] = field(default_factory=dict)
    retain_path: bool = False


class LintError(ValueError):
    def __init__(self, violations: list[str]):
        self.violations = violations
        super().__init__(
            f"{len(violations)} lint violation(s):\n" + "\n".join(violations)
        )


class Pipeline(ABC):
    """Lint and compile capability for one asset type."""

    name = "pipeline"

    def lint(self) -> Transform:
        return identity

    @abstractmethod
    def compile(self, options: CompileOptions) -> Transform:
        raise NotImplementedError
