# results.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Outcome(str, Enum):
    SUCCESS = "success"
    FATAL = "failed"
    DEGRADED = "warning"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one job or one asset copy."""
    name: str
    phase: str                 # "build" | "assets"
    outcome: Outcome
    message: Optional[str] = None


@dataclass
class BuildReport:
    """Everything a run produced, in execution order."""
    results: List[StepResult] = field(default_factory=list)
    not_run: List[str] = field(default_factory=list)

    @property
    def failed(self) -> List[StepResult]:
        return [r for r in self.results if r.outcome is Outcome.FATAL]

    @property
    def warnings(self) -> List[StepResult]:
        return [r for r in self.results if r.outcome is Outcome.DEGRADED]

    @property
    def ok(self) -> bool:
        # degraded steps never fail a run
        return not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def statuses(self) -> dict[str, str]:
        out = {r.name: r.outcome.value for r in self.results}
        for name in self.not_run:
            out[name] = "not run"
        return out
