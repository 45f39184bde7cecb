"""Console output formatting utilities for BetterBuild."""

from __future__ import annotations

import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_run_started(
        self,
        project: str,
        toolchain: str,
        job_count: int,
        asset_count: int = 0,
    ) -> None:
        """Print run start information."""
        print("\nBUILD STARTED")
        print(f"Project: {project}")
        print(f"Toolchain: {toolchain}")
        print(f"Jobs: {job_count}")
        print(f"Assets: {asset_count}")

    def print_job_start(self, index: int, total: int, name: str, outfile: str) -> None:
        print(f"\n[{index}/{total}] {name} -> {outfile}")

    def print_tool_output(self, text: str) -> None:
        """Relay the toolchain's own report, indented."""
        for line in text.splitlines():
            print(f"  {line}")

    def print_success(self, name: str) -> None:
        print(f"STATUS: success ({name})")

    def print_failure(
        self,
        name: str,
        reason: str,
        hint: Optional[str] = None,
    ) -> None:
        """Print a fatal job failure. The reason is shown verbatim."""
        print(f"JOB FAILED: {name}", file=sys.stderr)
        print(reason, file=sys.stderr)
        if hint:
            print(f"Hint: {hint}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def print_asset_copied(self, source: str, destination: str) -> None:
        print(f"  copied {source} -> {destination}")

    def print_not_run(self, names: list[str]) -> None:
        if names:
            print(f"\nNot attempted: {', '.join(names)}")

    def print_plan_job(self, index: int, name: str, entry: str, outfile: str, banner: bool) -> None:
        """Print one job of the build plan."""
        marker = " [banner]" if banner else ""
        print(f"  {index}. {name}: {entry} -> {outfile}{marker}")

    def print_plan_asset(self, source: str, destination: str) -> None:
        print(f"  - {source} -> {destination}")

    def print_results(self, results: dict[str, str]) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for name, status in results.items():
            print(f"  {name}: {status.upper()}")

    def print_build_complete(self, ok: bool, warnings: int = 0) -> None:
        if ok:
            suffix = f" with {warnings} warning(s)" if warnings else ""
            print(f"\nBUILD COMPLETE{suffix}")
        else:
            print("\nBUILD FAILED", file=sys.stderr)

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
