# assets.py
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, List

from .model import Asset
from .results import Outcome, StepResult
from .ui.console import get_console


def copy_asset(item: Asset, root: Path) -> Path:
    """Copy one asset under `root`, creating parent directories. Raises OSError."""
    src = root / item.source
    dst = root / item.destination
    if not src.is_file():
        raise FileNotFoundError(f"asset source not found: {src}")
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return dst


def sync_assets(assets: Iterable[Asset], root: str | Path = ".") -> List[StepResult]:
    """
    Copy auxiliary files into the output tree.

    Failures are downgraded to warnings: the compiled artifacts already
    exist, so a missing schema file must not fail the build. Every asset is
    attempted even if an earlier one failed.
    """
    console = get_console()
    root_p = Path(root)
    results: List[StepResult] = []

    for item in assets:
        name = f"asset:{item.source}"
        try:
            copy_asset(item, root_p)
        except OSError as e:
            console.print_warning(f"could not copy {item.source} -> {item.destination}: {e}")
            results.append(StepResult(name=name, phase="assets", outcome=Outcome.DEGRADED, message=str(e)))
            continue
        console.print_asset_copied(item.source, item.destination)
        results.append(StepResult(name=name, phase="assets", outcome=Outcome.SUCCESS))

    return results
