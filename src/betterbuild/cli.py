# cli.py
from __future__ import annotations

import shlex
import sys
from pathlib import Path

import click

from betterbuild.loader import PlanError, find_build_file, load_plan
from betterbuild.model import BuildPlan
from betterbuild.runner import run_pipeline
from betterbuild.targets import default_plan
from betterbuild.toolchain import EsbuildToolchain
from betterbuild.ui.console import Console, set_console, get_console

# usage / configuration errors, as opposed to a failed build (1)
EXIT_USAGE = 2


def resolve_plan(build_file: str | None, root: Path) -> BuildPlan:
    """
    Pick the build plan for this invocation.

    Order: explicit --file, then a default build file in root, then the
    built-in targets.
    """
    console = get_console()

    if build_file:
        path = Path(build_file)
        if not path.is_absolute() and not path.exists():
            path = root / path
        console.print_debug(f"Using build file: {path}")
        return load_plan(path)

    found = find_build_file(root)
    if found is not None:
        console.print_debug(f"Using build file: {found}")
        return load_plan(found)

    console.print_debug("No build file found, using built-in targets")
    return default_plan()


def _prepare_plan(ctx, build_file, root, targets, sourcemap, log_level) -> BuildPlan:
    console = get_console()
    try:
        plan = resolve_plan(build_file, root)
        if targets:
            plan = plan.select(targets)
    except (PlanError, ValueError) as e:
        console.print_error(
            "Invalid build plan",
            str(e),
            suggestion="Check the build file or run:\n  betterbuild plan",
        )
        ctx.exit(EXIT_USAGE)

    shared = plan.shared.with_overrides(sourcemap=sourcemap, log_level=log_level)
    return plan.with_shared(shared)


def _plan_options(fn):
    fn = click.option(
        "--file", "-f", "build_file",
        default=None,
        envvar="BETTERBUILD_FILE",
        help="Build file (.py, .toml or .json). Defaults to betterbuild.toml / betterbuild_build.py, then built-in targets.",
    )(fn)
    fn = click.option(
        "--root",
        default=".",
        envvar="BETTERBUILD_ROOT",
        show_default=True,
        type=click.Path(file_okay=False, path_type=Path),
        help="Project root; entry points, outfiles and assets are relative to it",
    )(fn)
    fn = click.option(
        "--target", "-t", "targets",
        multiple=True,
        help="Only build the named job (repeatable). Declared order is kept.",
    )(fn)
    return fn


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """BetterBuild: ordered, fail-fast bundling of every project artifact."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@_plan_options
@click.option(
    "--esbuild",
    "esbuild_cmd",
    default="esbuild",
    envvar="BETTERBUILD_ESBUILD",
    show_default=True,
    help="Command used to invoke esbuild (e.g. 'npx esbuild')",
)
@click.option("--sourcemap/--no-sourcemap", default=None, help="Override the plan's source map setting")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["verbose", "debug", "info", "warning", "error", "silent"]),
    help="Override the toolchain's log level",
)
@click.pass_context
def build(ctx, build_file, root, targets, esbuild_cmd, sourcemap, log_level):
    """Build every target, then copy assets into the output tree."""
    console = get_console()
    plan = _prepare_plan(ctx, build_file, root, targets, sourcemap, log_level)

    try:
        toolchain = EsbuildToolchain(shlex.split(esbuild_cmd))
        report = run_pipeline(plan, toolchain=toolchain, root=root)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    sys.exit(report.exit_code)


@cli.command("plan")
@_plan_options
@click.pass_context
def show_plan(ctx, build_file, root, targets):
    """Print the ordered build plan without building anything."""
    console = get_console()
    plan = _prepare_plan(ctx, build_file, root, targets, None, None)

    console.print_header(f"PLAN: {plan.name}")
    for index, job in enumerate(plan.jobs, start=1):
        console.print_plan_job(index, job.name, job.entry_point, job.outfile, banner=bool(job.banner))
    if plan.assets:
        console.print_header("ASSETS")
        for item in plan.assets:
            console.print_plan_asset(item.source, item.destination)
    shared = plan.shared
    console.print_info(
        f"\nplatform={shared.platform} format={shared.format} target={shared.target} "
        f"sourcemap={shared.sourcemap} packages={shared.packages}"
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
