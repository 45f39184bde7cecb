"""Shared test fixtures."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

import pytest

from betterbuild.targets import default_plan
from betterbuild.toolchain import EsbuildToolchain, ToolchainError
from betterbuild.ui.console import Console, set_console

FAKE_ESBUILD = Path(__file__).parent / "fake_esbuild.py"


class RecordingToolchain:
    """In-process toolchain: writes banner + source, remembers every call."""

    def __init__(self, fail_on: set[str] | None = None):
        self.calls = []
        self.fail_on = fail_on or set()

    def describe(self) -> str:
        return "recording"

    async def build(self, options) -> None:
        self.calls.append(options)
        if Path(options.entry_point).name in self.fail_on:
            raise ToolchainError("Transform failed with 1 error", exit_code=1)
        source = Path(options.entry_point).read_text(encoding="utf-8")
        Path(options.outfile).write_text((options.banner or "") + source, encoding="utf-8")


@pytest.fixture(autouse=True)
def fresh_console():
    """Each test gets its own non-debug console."""
    console = Console()
    set_console(console)
    yield console
    set_console(Console())


@pytest.fixture()
def recording_toolchain():
    return RecordingToolchain()


@pytest.fixture()
def fake_esbuild():
    return EsbuildToolchain([sys.executable, str(FAKE_ESBUILD)])


@pytest.fixture()
def fake_esbuild_cmd() -> str:
    return shlex.join([sys.executable, str(FAKE_ESBUILD)])


@pytest.fixture()
def ledger_project(tmp_path: Path) -> Path:
    """A project tree with every entry point of the built-in plan + the schema asset."""
    plan = default_plan()
    for job in plan.jobs:
        entry = tmp_path / job.entry_point
        entry.parent.mkdir(parents=True, exist_ok=True)
        entry.write_text(f"export const name = {job.name!r};\n", encoding="utf-8")
    for item in plan.assets:
        src = tmp_path / item.source
        src.parent.mkdir(parents=True, exist_ok=True)
        src.write_text("CREATE TABLE events (id uuid primary key);\n", encoding="utf-8")
    return tmp_path


@pytest.fixture()
def make_toolchain():
    return RecordingToolchain
