from __future__ import annotations

import pytest

from betterbuild.dsl import (
    asset,
    build,
    bundle,
    executable_banner,
    matrix,
    plan,
    provenance_banner,
)


def test_bundle_name_defaults_to_entry() -> None:
    job = bundle("core/index.ts", "dist/core/index.js")
    assert job.name == "core/index.ts"
    assert job.banner is None


def test_bundle_requires_outfile() -> None:
    with pytest.raises(ValueError):
        bundle("core/index.ts", "")


def test_builder_builds_job() -> None:
    job = build("ledger").entry("cli/ledger.ts").outfile("dist/cli/ledger.js").executable("Ledger").build()
    assert job.name == "ledger"
    assert job.banner == "#!/usr/bin/env node\n// Ledger\n"


def test_builder_without_entry_fails() -> None:
    with pytest.raises(ValueError, match="no entry point"):
        build("x").outfile("dist/x.js").build()


def test_banners() -> None:
    assert executable_banner() == "#!/usr/bin/env node\n"
    assert provenance_banner("Server") == "// Server\n"


def test_matrix_expands_jobs() -> None:
    jobs = matrix(["a", "b"]).jobs(lambda v: bundle(f"cli/{v}.ts", f"dist/cli/{v}.js"))
    assert [j.outfile for j in jobs] == ["dist/cli/a.js", "dist/cli/b.js"]


def test_plan_requires_jobs() -> None:
    with pytest.raises(ValueError, match="at least one job"):
        plan(assets=[asset("a.sql", "dist/a.sql")])


def test_plan_collects_jobs_list_and_varargs() -> None:
    p = plan(
        bundle("b.ts", "dist/b.js"),
        jobs_list=[bundle("a.ts", "dist/a.js")],
        assets=[asset("s.sql", "dist/s.sql")],
        name="demo",
    )
    assert p.job_names() == ["a.ts", "b.ts"]
    assert p.assets[0].destination == "dist/s.sql"
    assert p.name == "demo"
