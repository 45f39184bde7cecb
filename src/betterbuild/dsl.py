# dsl.py
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence

from .model import Asset, BuildJob, BuildPlan, SharedConfig


def bundle(
    entry: str,
    outfile: str,
    *,
    name: str | None = None,
    banner: str | None = None,
) -> BuildJob:
    """Declare one bundling job. `name` defaults to the entry point path."""
    if not entry:
        raise ValueError("bundle() needs an entry point")
    if not outfile:
        raise ValueError(f"bundle({entry!r}) needs an outfile")
    return BuildJob(name=name or entry, entry_point=entry, outfile=outfile, banner=banner)


def asset(source: str, destination: str) -> Asset:
    return Asset(source=source, destination=destination)


def executable_banner(title: str | None = None) -> str:
    """Shebang line (+ optional provenance comment) for directly runnable artifacts."""
    text = "#!/usr/bin/env node\n"
    if title:
        text += provenance_banner(title)
    return text


def provenance_banner(title: str) -> str:
    return f"// {title}\n"


def plan(
    *jobs: BuildJob,
    jobs_list: Optional[List[BuildJob]] = None,
    assets: Sequence[Asset] = (),
    shared: SharedConfig | None = None,
    name: str = "project",
) -> BuildPlan:
    """
    Build plan helper.

    Users can write:
        from betterbuild import build_plan, bundle, asset

        def plan():
            return build_plan(
                bundle("src/server.ts", "dist/server.js"),
                assets=[asset("schema.sql", "dist/schema.sql")],
            )
    """
    jobs_final = list(jobs_list or []) + list(jobs)
    if not jobs_final:
        raise ValueError(f"plan({name!r}) must have at least one job")
    return BuildPlan(
        jobs=tuple(jobs_final),
        assets=tuple(assets),
        shared=shared or SharedConfig(),
        name=name,
    )


build_plan = plan  # alias so build files can define their own plan()


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class BundleBuilder:
    def __init__(self, name: str):
        self.name = name
        self._entry: str | None = None
        self._outfile: str | None = None
        self._banner: str | None = None

    def entry(self, path: str):
        self._entry = path
        return self

    def outfile(self, path: str):
        self._outfile = path
        return self

    def banner(self, text: str):
        self._banner = text
        return self

    def executable(self, title: str | None = None):
        self._banner = executable_banner(title)
        return self

    def build(self) -> BuildJob:
        if not self._entry:
            raise ValueError(f"Job '{self.name}' has no entry point")
        if not self._outfile:
            raise ValueError(f"Job '{self.name}' has no outfile")
        return BuildJob(
            name=self.name,
            entry_point=self._entry,
            outfile=self._outfile,
            banner=self._banner,
        )


def build(name: str) -> BundleBuilder:
    """Convenience: build('server').entry(...).outfile(...).build()"""
    return BundleBuilder(name)


# ---------------------------------------------------------------------
# Matrix
# ---------------------------------------------------------------------

class Matrix:
    """
    Minimal matrix expander.

    Example:
        matrix(["migrate", "db-status"]).jobs(
            lambda v: bundle(f"cli/{v}.ts", f"dist/cli/{v}.js")
        )
    """
    def __init__(self, values: Iterable[Any]):
        self.values = list(values)

    def jobs(self, builder: Callable[[Any], BuildJob]) -> List[BuildJob]:
        return [builder(v) for v in self.values]


def matrix(values: Iterable[Any]) -> Matrix:
    return Matrix(values)
