# model.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class SharedConfig:
    """
    Toolchain settings applied to every job in a plan.

    `packages="external"` keeps third-party packages out of the artifact;
    they are resolved at run time from the deployment environment.
    """
    platform: str = "node"
    format: str = "esm"
    target: str = "node18"
    sourcemap: bool = True
    packages: str = "external"
    bundle: bool = True
    log_level: str = "info"

    def with_overrides(self, **overrides) -> SharedConfig:
        # None means "not given" (click options default to None)
        clean = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **clean)


@dataclass(frozen=True)
class BuildJob:
    """One entry point compiled into one artifact."""
    name: str
    entry_point: str
    outfile: str
    banner: Optional[str] = None


@dataclass(frozen=True)
class Asset:
    """A non-compiled file copied into the output tree after the build."""
    source: str
    destination: str


@dataclass(frozen=True)
class BuildPlan:
    """
    Ordered build jobs + post-build assets + the shared config.

    Jobs run in declared order. The plan itself never changes once built;
    `select()` returns a new plan.
    """
    jobs: Tuple[BuildJob, ...]
    assets: Tuple[Asset, ...] = ()
    shared: SharedConfig = field(default_factory=SharedConfig)
    name: str = "project"

    def __post_init__(self) -> None:
        # accept lists from callers, store tuples
        object.__setattr__(self, "jobs", tuple(self.jobs))
        object.__setattr__(self, "assets", tuple(self.assets))

        names = [j.name for j in self.jobs]
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate job names found: {dupes}")

        outfiles = [j.outfile for j in self.jobs]
        if len(set(outfiles)) != len(outfiles):
            dupes = sorted({o for o in outfiles if outfiles.count(o) > 1})
            raise ValueError(f"Several jobs write the same outfile: {dupes}")

    def job_names(self) -> list[str]:
        return [j.name for j in self.jobs]

    def select(self, names: Iterable[str]) -> BuildPlan:
        """Restrict the plan to `names`, keeping declared order."""
        wanted = list(names)
        known = set(self.job_names())
        missing = [n for n in wanted if n not in known]
        if missing:
            raise ValueError(
                f"Unknown target(s): {missing}. Known targets: {self.job_names()}"
            )
        return replace(self, jobs=tuple(j for j in self.jobs if j.name in set(wanted)))

    def with_shared(self, shared: SharedConfig) -> BuildPlan:
        return replace(self, shared=shared)
