# targets.py
# Built-in build targets for the Universal Business Ledger project.
# Adding a target here is a data change only; the runner never looks at names.
from __future__ import annotations

from .dsl import asset, bundle, executable_banner, matrix, plan, provenance_banner
from .model import BuildPlan, SharedConfig

PROJECT_NAME = "Universal Business Ledger"

DEFAULT_SHARED = SharedConfig(
    platform="node",
    format="esm",
    target="node18",
    sourcemap=True,
    packages="external",
    log_level="info",
)

# Extra CLIs that follow the same cli/<name>.ts -> dist/cli/<name>.js layout
DB_CLIS = ["db-migrate", "db-status", "db-reset"]


def _cli(name: str, title: str):
    return bundle(
        f"cli/{name}.ts",
        f"dist/cli/{name}.js",
        name=f"cli:{name}",
        banner=executable_banner(f"{PROJECT_NAME} - {title}"),
    )


def default_plan() -> BuildPlan:
    return plan(
        bundle(
            "antenna/server.ts",
            "dist/antenna/server.js",
            name="antenna-server",
            banner=provenance_banner(f"{PROJECT_NAME} - Antenna Server"),
        ),
        _cli("ledger", "CLI"),
        bundle("core/index.ts", "dist/core/index.js", name="core"),
        bundle("sdk/index.ts", "dist/sdk/index.js", name="sdk"),
        bundle("workers/job-processor.ts", "dist/workers/job-processor.js", name="worker"),
        _cli("migrate", "Migration CLI"),
        *matrix(DB_CLIS).jobs(lambda n: _cli(n, f"{n} CLI")),
        assets=[
            asset("core/store/postgres-schema.sql", "dist/core/store/postgres-schema.sql"),
        ],
        shared=DEFAULT_SHARED,
        name=PROJECT_NAME,
    )
