# runner.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from .assets import sync_assets
from .model import BuildJob, BuildPlan, SharedConfig
from .results import BuildReport, Outcome, StepResult
from .toolchain import BuildOptions, Toolchain, ToolchainError
from .ui.console import get_console


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class BuildFailure(Exception):
    """
    Fatal build error for one job.

    `message` is the underlying error text, untouched, so the operator sees
    exactly what the toolchain said.
    """
    kind: str
    job: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.job}] {self.kind}: {self.message}"


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

async def execute_job(
    job: BuildJob,
    shared: SharedConfig,
    toolchain: Toolchain,
    root: str | Path = ".",
) -> Path:
    """
    Build one job. Returns the artifact path.

    Raises BuildFailure on any problem; nothing is retried.
    """
    root_p = Path(root).resolve()
    entry = root_p / job.entry_point
    outfile = root_p / job.outfile

    if not entry.is_file():
        raise BuildFailure(
            kind="missing_entry_point",
            job=job.name,
            message=f"entry point not found: {job.entry_point}",
            details={"path": str(entry)},
        )

    try:
        outfile.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildFailure(kind="output_unwritable", job=job.name, message=str(e)) from e

    options = BuildOptions.merge(shared, job, entry_point=str(entry), outfile=str(outfile))

    try:
        await toolchain.build(options)
    except ToolchainError as e:
        details = {}
        if e.exit_code is not None:
            details["exit_code"] = e.exit_code
        if e.hint:
            details["hint"] = e.hint
        raise BuildFailure(kind="toolchain_error", job=job.name, message=e.message, details=details) from e

    return outfile


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

async def run_build(
    plan: BuildPlan,
    *,
    toolchain: Toolchain,
    root: str | Path = ".",
) -> BuildReport:
    """
    Run every job of `plan` in declared order, one at a time, then sync assets.

    Severity policy:
      - a job failure is FATAL: later jobs and the asset step are skipped
      - an asset failure is DEGRADED: reported, run still succeeds
    """
    console = get_console()
    report = BuildReport()
    total = len(plan.jobs)

    console.print_run_started(
        project=plan.name,
        toolchain=toolchain.describe(),
        job_count=total,
        asset_count=len(plan.assets),
    )
    console.print_header("BUILD")

    for index, job in enumerate(plan.jobs, start=1):
        console.print_job_start(index, total, job.name, job.outfile)
        try:
            await execute_job(job, plan.shared, toolchain, root)
        except BuildFailure as e:
            console.print_failure(job.name, e.message, hint=e.details.get("hint"))
            report.results.append(
                StepResult(name=job.name, phase="build", outcome=Outcome.FATAL, message=e.message)
            )
            report.not_run = [j.name for j in plan.jobs[index:]]
            report.not_run += [f"asset:{a.source}" for a in plan.assets]
            break
        console.print_success(job.name)
        report.results.append(StepResult(name=job.name, phase="build", outcome=Outcome.SUCCESS))

    if report.ok and plan.assets:
        console.print_header("ASSETS")
        report.results.extend(sync_assets(plan.assets, root))

    console.print_not_run(report.not_run)
    console.print_results(report.statuses())
    console.print_build_complete(report.ok, warnings=len(report.warnings))
    return report


def run_pipeline(
    plan: BuildPlan,
    *,
    toolchain: Toolchain,
    root: str | Path = ".",
) -> BuildReport:
    """Synchronous entry point: one event loop per run."""
    return asyncio.run(run_build(plan, toolchain=toolchain, root=root))
