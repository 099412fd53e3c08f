from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class VersionControlClient(Protocol):
    def is_work_tree(self, path: Path) -> bool:
        raise NotImplementedError

    def remote_url(self, path: Path, remote: str = "origin") -> str:
        """Return the configured URL of `remote`, or "" when there is none."""
        raise NotImplementedError

    def user_name(self) -> str:
        raise NotImplementedError

    def clone(self, url: str, parent_dir: Path) -> Path:
        """Clone `url` into `parent_dir` and return the new working tree."""
        raise NotImplementedError

    def pull(self, path: Path) -> None:
        """Fast-forward-only pull of the working tree at `path`."""
        raise NotImplementedError


class PackageEnvironmentManager(Protocol):
    """Project environment tooling invoked by name (uv in practice).

    Every mutating method raises ExternalToolFailure on a non-zero exit.
    """

    def is_available(self) -> bool:
        raise NotImplementedError

    def install(self) -> None:
        raise NotImplementedError

    def sync(self, root: Path) -> None:
        raise NotImplementedError

    def register_kernel(self, root: Path, name: str) -> None:
        raise NotImplementedError

    def launch_notebook(self, root: Path) -> None:
        """Start Jupyter Lab. Blocks until the server is stopped."""
        raise NotImplementedError


class ChecksumComputer(Protocol):
    def sha256_file(self, path: Path) -> str:
        """Hex SHA-256 of `path`; raises DegradedComputationError when unavailable."""
        raise NotImplementedError


class Prompter(Protocol):
    """Interactive line input.

    `ask` returns None when no terminal is available, so callers can fall back
    to their default instead of blocking.
    """

    def ask(self, question: str, default: str = "") -> Optional[str]:
        raise NotImplementedError
