"""Local environment setup: install uv if needed, sync, register a kernel, start Jupyter.

Every step here is a convenience. Failures are reported as warnings and the
remaining steps still run.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .bootstrap.resolve import resolve_decision
from .config import BootstrapSettings
from .contracts import PackageEnvironmentManager, Prompter
from .errors import ExternalToolFailure


LAUNCH_ENV_VAR = "START_JUPYTER"
NOTEBOOK_HINT = "uv run --with jupyter jupyter lab"


@dataclass
class SetupReport:
    installed: bool = False
    synced: bool = False
    kernel_registered: bool = False
    launched: bool = False
    warnings: List[str] = field(default_factory=list)


def _warn(report: SetupReport, msg: str) -> None:
    report.warnings.append(msg)
    print(f"[setup][WARN] {msg}")


def ensure_tool(env: PackageEnvironmentManager, report: SetupReport) -> bool:
    print("[setup] Checking for uv...")
    if env.is_available():
        print("[setup] uv is already installed.")
        return True

    print("[setup] uv not found. Installing via official script...")
    try:
        env.install()
    except ExternalToolFailure as e:
        _warn(report, f"failed to install uv: {e}")
        return False
    report.installed = True
    if not env.is_available():
        _warn(report, "uv was installed but is not on PATH; open a new shell and re-run `s2j setup`")
        return False
    return True


def run_setup(
    root: Path,
    *,
    env: PackageEnvironmentManager,
    settings: BootstrapSettings,
    prompter: Optional[Prompter] = None,
    launch: Optional[bool] = None,
) -> SetupReport:
    """Set up the project environment in `root`.

    Jupyter launch precedence: `launch` argument > START_JUPYTER > prompt > no.
    """
    report = SetupReport()
    print(f"[setup] Working directory: {root}")

    if ensure_tool(env, report):
        print("[setup] Syncing Python environment with uv...")
        try:
            env.sync(root)
            report.synced = True
        except ExternalToolFailure as e:
            _warn(report, f"uv sync failed: {e}")

        print("[setup] Registering IPython kernel...")
        try:
            env.register_kernel(root, settings.kernel_name)
            report.kernel_registered = True
        except ExternalToolFailure as e:
            _warn(report, f"ipython kernel registration skipped: {e}")
    else:
        _warn(report, "skipping environment sync; uv is unavailable")

    if launch is not None:
        override: Optional[str] = "yes" if launch else "no"
    else:
        override = os.environ.get(LAUNCH_ENV_VAR)

    should_launch = report.synced and resolve_decision(
        override=override,
        question="Start Jupyter Lab now?",
        default=True,
        prompter=prompter,
        fallback=False,
    )
    if not should_launch:
        print(f"[setup] Skipping Jupyter Lab launch. You can start it later with: {NOTEBOOK_HINT}")
        return report

    print("[setup] Launching Jupyter Lab... (Ctrl+C to stop)")
    try:
        env.launch_notebook(root)
        report.launched = True
    except KeyboardInterrupt:
        report.launched = True
        print("\n[setup] Jupyter Lab stopped.")
    except ExternalToolFailure as e:
        _warn(report, f"jupyter lab exited with an error: {e}")
    return report
