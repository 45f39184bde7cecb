# loader.py
from __future__ import annotations

import json
import runpy
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .model import Asset, BuildJob, BuildPlan, SharedConfig

DEFAULT_BUILD_FILES = ("betterbuild.toml", "betterbuild.json", "betterbuild_build.py")


class PlanError(Exception):
    """A build file could not be loaded or does not describe a valid plan."""


# -------------------- Schemas --------------------

class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ProjectSchema(_Strict):
    name: str = "project"


class SharedSchema(_Strict):
    platform: str = "node"
    format: str = "esm"
    target: str = "node18"
    sourcemap: bool = True
    packages: str = "external"
    bundle: bool = True
    log_level: str = "info"


class JobSchema(_Strict):
    entry: str = Field(min_length=1)
    outfile: str = Field(min_length=1)
    name: Optional[str] = None
    banner: Optional[str] = None


class AssetSchema(_Strict):
    source: str = Field(min_length=1)
    destination: str = Field(min_length=1)


class BuildFileSchema(_Strict):
    project: ProjectSchema = Field(default_factory=ProjectSchema)
    shared: SharedSchema = Field(default_factory=SharedSchema)
    jobs: list[JobSchema] = Field(min_length=1)
    assets: list[AssetSchema] = Field(default_factory=list)

    def to_plan(self) -> BuildPlan:
        return BuildPlan(
            jobs=tuple(
                BuildJob(name=j.name or j.entry, entry_point=j.entry, outfile=j.outfile, banner=j.banner)
                for j in self.jobs
            ),
            assets=tuple(Asset(source=a.source, destination=a.destination) for a in self.assets),
            shared=SharedConfig(**self.shared.model_dump()),
            name=self.project.name,
        )


# ----------------------------------------------------------------------
# Loading
# ----------------------------------------------------------------------

def find_build_file(root: str | Path = ".") -> Path | None:
    """First default build file present in `root`, or None."""
    root_p = Path(root)
    for candidate in DEFAULT_BUILD_FILES:
        path = root_p / candidate
        if path.is_file():
            return path
    return None


def plan_from_data(data: dict[str, Any]) -> BuildPlan:
    try:
        schema = BuildFileSchema.model_validate(data)
    except ValidationError as e:
        raise PlanError(f"Invalid build file:\n{e}") from e
    try:
        return schema.to_plan()
    except ValueError as e:
        raise PlanError(str(e)) from e


def _load_python(path: Path) -> BuildPlan:
    """
    The file must define one of:
      - plan() -> BuildPlan
      - PLAN = BuildPlan(...)
      - JOBS = [BuildJob, ...]   (default shared config, no assets)
    """
    module_name = f"betterbuild_plan_{path.stem}"
    try:
        globals_dict = runpy.run_path(str(path), run_name=module_name)
    except Exception as e:
        # syntax/import errors in the file, or plan construction errors
        raise PlanError(f"{path.name}: {e}") from e

    result: Any = None
    try:
        if "plan" in globals_dict and callable(globals_dict["plan"]):
            result = globals_dict["plan"]()
        elif "PLAN" in globals_dict:
            result = globals_dict["PLAN"]
        elif "JOBS" in globals_dict:
            result = BuildPlan(jobs=tuple(globals_dict["JOBS"]), name=path.stem)
    except TypeError as e:
        if "positional argument" in str(e):
            raise PlanError(
                "Your plan() is being called with arguments (name collision with the helper). "
                "Use the 'build_plan' helper instead: `from betterbuild import build_plan, bundle` then "
                "`def plan(): return build_plan(bundle(...), bundle(...))`"
            ) from e
        raise PlanError(f"{path.name}: {e}") from e
    except Exception as e:
        raise PlanError(f"{path.name}: {e}") from e

    if not isinstance(result, BuildPlan) or not all(isinstance(j, BuildJob) for j in result.jobs):
        raise PlanError(
            "Build file must return/define a BuildPlan. "
            "Define plan() -> BuildPlan, PLAN = build_plan(...) or JOBS = [bundle(...), ...]."
        )
    return result


def load_plan(path: str | Path) -> BuildPlan:
    """Load a build plan from a .py, .toml or .json build file."""
    plan_path = Path(path).expanduser().resolve()
    if not plan_path.exists():
        raise PlanError(f"Build file not found: {plan_path}")

    suffix = plan_path.suffix
    if suffix == ".py":
        return _load_python(plan_path)
    if suffix == ".toml":
        try:
            data = tomllib.loads(plan_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise PlanError(f"Could not parse {plan_path.name}: {e}") from e
        return plan_from_data(data)
    if suffix == ".json":
        try:
            data = json.loads(plan_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise PlanError(f"Could not parse {plan_path.name}: {e}") from e
        if not isinstance(data, dict):
            raise PlanError(f"{plan_path.name} must contain a JSON object")
        return plan_from_data(data)

    raise PlanError(f"Build file must be .py, .toml or .json, got: {plan_path.name}")
