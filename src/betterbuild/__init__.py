from .dsl import asset, build, build_plan, bundle, executable_banner, matrix, plan, provenance_banner, BundleBuilder
from .model import Asset, BuildJob, BuildPlan, SharedConfig
from .runner import BuildFailure, execute_job, run_build, run_pipeline

__all__ = [
    "asset", "build", "build_plan", "bundle", "executable_banner", "matrix", "plan",
    "provenance_banner", "BundleBuilder",
    "Asset", "BuildJob", "BuildPlan", "SharedConfig",
    "BuildFailure", "execute_job", "run_build", "run_pipeline",
]
