from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

import requests

from ..contracts import PackageEnvironmentManager
from ..errors import ExternalToolFailure


DEFAULT_INSTALL_URL = "https://astral.sh/uv/install.sh"
DEFAULT_REQUEST_TIMEOUT = 60


def _request_timeout() -> int:
    raw = str(os.getenv("S2J_REQUEST_TIMEOUT", "") or "").strip()
    try:
        return int(raw) if raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        print(f"[setup][WARN] ignoring non-numeric S2J_REQUEST_TIMEOUT={raw!r}")
        return DEFAULT_REQUEST_TIMEOUT


def _run(cmd: List[str], cwd: Optional[Path] = None, stdin_text: Optional[str] = None) -> None:
    """Run `cmd` with output streaming to the terminal; raise on non-zero exit."""
    try:
        cp = subprocess.run(cmd, cwd=str(cwd) if cwd else None, input=stdin_text, text=True, check=False)
    except FileNotFoundError as e:
        raise ExternalToolFailure(cmd, 127, str(e)) from e
    if cp.returncode != 0:
        raise ExternalToolFailure(cmd, cp.returncode)


class UvEnvironmentManager(PackageEnvironmentManager):
    """PackageEnvironmentManager backed by the uv executable."""

    def __init__(self, uv: str = "uv", install_url: str = DEFAULT_INSTALL_URL, session: Optional[requests.Session] = None):
        self.uv = uv
        self.install_url = install_url
        self.session = session or requests.Session()

    def is_available(self) -> bool:
        return shutil.which(self.uv) is not None

    def install(self) -> None:
        """Run the official installer script, then expose ~/.local/bin on PATH."""
        try:
            r = self.session.get(self.install_url, timeout=_request_timeout())
            r.raise_for_status()
        except requests.RequestException as e:
            raise ExternalToolFailure(["GET", self.install_url], 1, str(e)) from e

        _run(["sh"], stdin_text=r.text)

        local_bin = str(Path.home() / ".local" / "bin")
        path = os.environ.get("PATH", "")
        if local_bin not in path.split(os.pathsep):
            os.environ["PATH"] = local_bin + os.pathsep + path

    def sync(self, root: Path) -> None:
        _run([self.uv, "sync"], cwd=root)

    def register_kernel(self, root: Path, name: str) -> None:
        _run([self.uv, "run", "ipython", "kernel", "install", "--user", f"--name={name}"], cwd=root)

    def launch_notebook(self, root: Path) -> None:
        _run([self.uv, "run", "--with", "jupyter", "jupyter", "lab"], cwd=root)
