from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional

from ..models import BootstrapState, Configuration, DerivedValues
from ..utils.fs import atomic_write_text
from ..utils.time import utcnow_iso


class StateStore:
    """JSON bootstrap state record at a fixed path. Existence means "bootstrapped"."""

    def __init__(self, path: Path, clock: Callable[[], str] = utcnow_iso):
        self.path = path
        self.clock = clock

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[BootstrapState]:
        """Return the recorded state, or None when absent or unreadable."""
        if not self.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if not isinstance(data, dict):
            return None
        return BootstrapState.from_dict(data)

    def write_state(self, cfg: Configuration, derived: DerivedValues, sha: str) -> BootstrapState:
        """Overwrite the record with this run's values; never merges with prior content."""
        state = BootstrapState(
            timestamp=self.clock(),
            gh_user=cfg.owner,
            repo_name=cfg.repo_name,
            repo_url=derived.repo_url,
            pages_base=derived.pages_base,
            dl_sh_sha256=sha,
        )
        atomic_write_text(self.path, json.dumps(state.to_dict(), indent=2) + "\n")
        return state

    def delete(self) -> bool:
        if not self.exists():
            return False
        self.path.unlink()
        return True
