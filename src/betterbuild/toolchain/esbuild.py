# toolchain/esbuild.py
from __future__ import annotations

import asyncio
from typing import List, Sequence

from . import ToolchainError
from ..ui.console import get_console

TOOL_HINTS = {
    "esbuild": "Install esbuild (e.g., npm install --save-dev esbuild) or pass --esbuild <command>.",
    "npx": "Install Node.js (includes npx) or fix PATH.",
}


class EsbuildToolchain:
    """Runs the esbuild CLI once per job."""

    def __init__(self, command: Sequence[str] = ("esbuild",)):
        if not command:
            raise ValueError("esbuild command must not be empty")
        self.command = list(command)

    def describe(self) -> str:
        return " ".join(self.command)

    def argv(self, options) -> List[str]:
        """Translate BuildOptions into esbuild CLI arguments."""
        args = [*self.command, options.entry_point]
        if options.bundle:
            args.append("--bundle")
        args += [
            f"--outfile={options.outfile}",
            f"--platform={options.platform}",
            f"--format={options.format}",
            f"--target={options.target}",
            f"--packages={options.packages}",
            f"--log-level={options.log_level}",
        ]
        if options.sourcemap:
            args.append("--sourcemap")
        if options.banner:
            args.append(f"--banner:js={options.banner}")
        return args

    async def build(self, options) -> None:
        argv = self.argv(options)
        console = get_console()
        console.print_debug(f"exec: {argv}")

        tool = self.command[0]
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            hint = TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")
            raise ToolchainError(f"{tool} is not available", hint=hint)
        except OSError as e:
            raise ToolchainError(
                f"could not run {tool}: {e}",
                hint=f"Check that {tool} is executable or pass --esbuild <command>.",
            ) from e

        stdout, stderr = await proc.communicate()
        report = stderr.decode("utf-8", errors="replace").strip()

        if proc.returncode != 0:
            # full report: the first error is the one that matters
            raise ToolchainError(
                report or f"esbuild exited with {proc.returncode}",
                exit_code=proc.returncode,
            )

        # esbuild writes its own per-build summary to stderr
        if report:
            console.print_tool_output(report)
        if stdout.strip():
            console.print_tool_output(stdout.decode("utf-8", errors="replace").strip())
