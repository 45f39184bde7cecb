# toolchain/__init__.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from ..model import BuildJob, SharedConfig


@dataclass(frozen=True)
class BuildOptions:
    """Shared config merged with one job: everything a toolchain needs."""
    entry_point: str
    outfile: str
    platform: str
    format: str
    target: str
    sourcemap: bool
    packages: str
    bundle: bool
    log_level: str
    banner: Optional[str] = None

    @classmethod
    def merge(cls, shared: SharedConfig, job: BuildJob, *, entry_point: str, outfile: str) -> BuildOptions:
        return cls(
            entry_point=entry_point,
            outfile=outfile,
            platform=shared.platform,
            format=shared.format,
            target=shared.target,
            sourcemap=shared.sourcemap,
            packages=shared.packages,
            bundle=shared.bundle,
            log_level=shared.log_level,
            banner=job.banner,
        )


class ToolchainError(Exception):
    """The bundler rejected a build (syntax error, unresolved import, write failure...)."""

    def __init__(self, message: str, *, exit_code: int | None = None, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.hint = hint


@runtime_checkable
class Toolchain(Protocol):
    async def build(self, options: BuildOptions) -> None: ...

    def describe(self) -> str: ...


from .esbuild import EsbuildToolchain  # noqa: E402

__all__ = ["BuildOptions", "Toolchain", "ToolchainError", "EsbuildToolchain"]
