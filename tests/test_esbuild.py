from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

from betterbuild.model import BuildJob, SharedConfig
from betterbuild.toolchain import BuildOptions, EsbuildToolchain, ToolchainError


def _options(tmp_path: Path, banner: str | None = None, sourcemap: bool = True) -> BuildOptions:
    job = BuildJob(name="app", entry_point="app.ts", outfile="dist/app.js", banner=banner)
    return BuildOptions.merge(
        SharedConfig(sourcemap=sourcemap),
        job,
        entry_point=str(tmp_path / "app.ts"),
        outfile=str(tmp_path / "app.js"),
    )


def test_argv_carries_shared_config(tmp_path: Path) -> None:
    toolchain = EsbuildToolchain(["npx", "esbuild"])
    argv = toolchain.argv(_options(tmp_path, banner="#!/usr/bin/env node\n"))

    assert argv[:3] == ["npx", "esbuild", str(tmp_path / "app.ts")]
    assert "--bundle" in argv
    assert f"--outfile={tmp_path / 'app.js'}" in argv
    assert "--platform=node" in argv
    assert "--format=esm" in argv
    assert "--target=node18" in argv
    assert "--packages=external" in argv
    assert "--log-level=info" in argv
    assert "--sourcemap" in argv
    assert "--banner:js=#!/usr/bin/env node\n" in argv


def test_argv_without_optional_flags(tmp_path: Path) -> None:
    argv = EsbuildToolchain().argv(_options(tmp_path, sourcemap=False))
    assert "--sourcemap" not in argv
    assert not any(a.startswith("--banner") for a in argv)


def test_build_writes_banner_first(tmp_path: Path, fake_esbuild) -> None:
    (tmp_path / "app.ts").write_text("console.log('hi');\n", encoding="utf-8")

    asyncio.run(fake_esbuild.build(_options(tmp_path, banner="// App\n")))

    out = (tmp_path / "app.js").read_text(encoding="utf-8")
    assert out.startswith("// App\n")
    assert "console.log('hi');" in out
    assert (tmp_path / "app.js.map").exists()


def test_build_failure_passes_message_through(tmp_path: Path, fake_esbuild) -> None:
    (tmp_path / "app.ts").write_text("const x = 1;\n<<< broken\n", encoding="utf-8")

    with pytest.raises(ToolchainError) as exc_info:
        asyncio.run(fake_esbuild.build(_options(tmp_path)))

    assert 'Unexpected "<<"' in exc_info.value.message
    assert exc_info.value.exit_code == 1
    assert not (tmp_path / "app.js").exists()


def test_missing_executable_has_hint(tmp_path: Path) -> None:
    toolchain = EsbuildToolchain(["betterbuild-no-such-esbuild"])
    with pytest.raises(ToolchainError) as exc_info:
        asyncio.run(toolchain.build(_options(tmp_path)))
    assert "is not available" in exc_info.value.message
    assert exc_info.value.hint


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        EsbuildToolchain([])


def test_long_error_report_keeps_first_error(tmp_path: Path) -> None:
    noisy = tmp_path / "noisy_esbuild.py"
    noisy.write_text(
        "import sys\n"
        "print('[ERROR] Unexpected \"<<\"', file=sys.stderr)\n"
        "for i in range(600):\n"
        "    print(f'[WARNING] noise {i}', file=sys.stderr)\n"
        "sys.exit(1)\n",
        encoding="utf-8",
    )
    toolchain = EsbuildToolchain([sys.executable, str(noisy)])

    with pytest.raises(ToolchainError) as exc_info:
        asyncio.run(toolchain.build(_options(tmp_path)))

    message = exc_info.value.message
    assert message.startswith('[ERROR] Unexpected "<<"')
    assert "[WARNING] noise 599" in message


def test_non_executable_command_is_toolchain_error(tmp_path: Path) -> None:
    tool = tmp_path / "esbuild"
    tool.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    tool.chmod(0o644)
    toolchain = EsbuildToolchain([str(tool)])

    with pytest.raises(ToolchainError) as exc_info:
        asyncio.run(toolchain.build(_options(tmp_path)))

    assert "could not run" in exc_info.value.message
    assert exc_info.value.hint
