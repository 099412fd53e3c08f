from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Tuple

# README reconciliation outcomes, in the order the state machine considers them.
ReadmeAction = Literal["replace", "patch_block", "append_block", "substitute_placeholders"]
README_ACTION_VALUES: Tuple[str, ...] = ("replace", "patch_block", "append_block", "substitute_placeholders")

STATE_FIELDS: Tuple[str, ...] = ("timestamp", "gh_user", "repo_name", "repo_url", "pages_base", "dl_sh_sha256")


@dataclass(frozen=True)
class InitFlags:
    """Raw command line input for ``s2j init``; empty strings mean "not given"."""

    user: str = ""
    repo: str = ""
    domain: str = ""
    assume_yes: bool = False
    regen_readme: bool = False


@dataclass(frozen=True)
class Configuration:
    """Resolved personalization for one run. Immutable once resolved."""

    owner: str
    repo_name: str
    domain: str = ""
    assume_yes: bool = False
    regen_readme: bool = False


@dataclass(frozen=True)
class DerivedValues:
    """Values computed from a Configuration. Recomputed every run, never cached."""

    repo_url: str
    repo_web_url: str
    pages_base: str
    download_cmd: str
    download_cmd_ps: str


@dataclass(frozen=True)
class BootstrapState:
    """Persisted bootstrap record.

    Its presence on disk is the only signal that a directory was bootstrapped
    before. Written create-or-overwrite, never merged.
    """

    timestamp: str
    gh_user: str
    repo_name: str
    repo_url: str
    pages_base: str
    dl_sh_sha256: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BootstrapState":
        return cls(**{k: str(data.get(k) or "") for k in STATE_FIELDS})


@dataclass(frozen=True)
class ReadmeOutcome:
    action: ReadmeAction
    text: str
    # True when the previous README must be saved as the template copy first.
    backup: bool = False
