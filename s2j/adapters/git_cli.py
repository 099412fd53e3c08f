from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from ..contracts import VersionControlClient
from ..errors import ExternalToolFailure


def _run(cmd: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=False, text=True, capture_output=True)
    except FileNotFoundError:
        # git is not installed; report like a failed command.
        return subprocess.CompletedProcess(cmd, 127, "", f"{cmd[0]}: command not found")


def repo_dir_name(url: str) -> str:
    """Directory name git clone picks for `url` (basename without .git)."""
    name = url.rstrip("/").replace(":", "/").rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


class GitCliClient(VersionControlClient):
    """VersionControlClient shelling out to the git executable."""

    def __init__(self, git: str = "git"):
        self.git = git

    def is_work_tree(self, path: Path) -> bool:
        cp = _run([self.git, "-C", str(path), "rev-parse", "--is-inside-work-tree"])
        return cp.returncode == 0 and cp.stdout.strip() == "true"

    def remote_url(self, path: Path, remote: str = "origin") -> str:
        if not self.is_work_tree(path):
            return ""
        cp = _run([self.git, "-C", str(path), "config", "--get", f"remote.{remote}.url"])
        return cp.stdout.strip() if cp.returncode == 0 else ""

    def user_name(self) -> str:
        cp = _run([self.git, "config", "user.name"])
        return cp.stdout.strip() if cp.returncode == 0 else ""

    def clone(self, url: str, parent_dir: Path) -> Path:
        cmd = [self.git, "clone", url]
        cp = _run(cmd, cwd=parent_dir)
        if cp.returncode != 0:
            raise ExternalToolFailure(cmd, cp.returncode, cp.stderr)
        return parent_dir / repo_dir_name(url)

    def pull(self, path: Path) -> None:
        cmd = [self.git, "-C", str(path), "pull", "--ff-only"]
        cp = _run(cmd)
        if cp.returncode != 0:
            raise ExternalToolFailure(cmd, cp.returncode, cp.stderr)
