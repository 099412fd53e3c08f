from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple

from ..contracts import Prompter, VersionControlClient
from ..errors import ConfigurationError
from ..models import Configuration, InitFlags


# https://github.com/<owner>/<repo>(.git) and git@github.com:<owner>/<repo>(.git)
_GITHUB_REMOTE_RE = re.compile(r"github\.com[:/]([^/]+)/([^/]+?)(?:\.git)?/?$")

TRUTHY = ("1", "y", "yes", "true", "on")
FALSY = ("0", "n", "no", "false", "off")


def parse_github_remote(url: str) -> Tuple[str, str]:
    """Return (owner, repo) from a GitHub remote URL, or ("", "") if it is not one."""
    m = _GITHUB_REMOTE_RE.search((url or "").strip())
    if not m:
        return "", ""
    return m.group(1), m.group(2)


def read_cname(root: Path, util_dir: str) -> str:
    """First non-comment, non-blank line of <util_dir>/CNAME, else of ./CNAME."""
    for p in (root / util_dir / "CNAME", root / "CNAME"):
        if not p.is_file():
            continue
        for line in p.read_text(encoding="utf-8").splitlines():
            s = line.strip()
            if s and not s.startswith("#"):
                return s
        return ""
    return ""


def resolve_value(*, explicit: str, inferred: str, question: str, interactive: bool, prompter: Optional[Prompter]) -> str:
    """Resolve one setting.

    Precedence:
      1) explicit flag
      2) interactive prompt showing the inferred default (when interactive)
      3) inferred default
    """
    if explicit and explicit.strip():
        return explicit.strip()
    if interactive and prompter is not None:
        answer = prompter.ask(question, inferred)
        if answer and answer.strip():
            return answer.strip()
    return (inferred or "").strip()


def resolve_decision(
    *,
    override: Optional[str],
    question: str,
    default: bool,
    prompter: Optional[Prompter],
    fallback: Optional[bool] = None,
) -> bool:
    """Resolve a yes/no decision.

    Precedence:
      1) explicit override ("1/yes/true" or "0/no/false"; anything else is ignored)
      2) interactive prompt (blank answer means `default`)
      3) `fallback` (or `default`) when no terminal is available
    """
    o = str(override or "").strip().lower()
    if o in TRUTHY:
        return True
    if o in FALSY:
        return False

    if prompter is not None:
        suffix = "[Y/n]" if default else "[y/N]"
        answer = prompter.ask(f"{question} {suffix}")
        if answer is not None:
            a = answer.strip().lower()
            if not a:
                return default
            return not a.startswith("n") if default else a.startswith("y")
    return default if fallback is None else fallback


def resolve_configuration(
    flags: InitFlags,
    *,
    root: Path,
    vcs: VersionControlClient,
    util_dir: str = "dl-util",
    prompter: Optional[Prompter] = None,
) -> Configuration:
    """Resolve owner, repo name and domain for this run.

    Inferred defaults:
      - owner/repo from the GitHub `origin` remote of `root`
      - owner falls back to `git config user.name`, repo to the directory name
      - domain from <util_dir>/CNAME or ./CNAME

    Raises:
        ConfigurationError: owner or repo name is empty after every source.
    """
    remote_owner, remote_repo = parse_github_remote(vcs.remote_url(root))

    inferred_owner = remote_owner or vcs.user_name()
    inferred_repo = remote_repo or root.resolve().name
    inferred_domain = read_cname(root, util_dir)

    interactive = not flags.assume_yes
    owner = resolve_value(
        explicit=flags.user,
        inferred=inferred_owner,
        question="GitHub user/organization",
        interactive=interactive,
        prompter=prompter,
    )
    repo_name = resolve_value(
        explicit=flags.repo,
        inferred=inferred_repo,
        question="Repository name",
        interactive=interactive,
        prompter=prompter,
    )
    domain = resolve_value(
        explicit=flags.domain,
        inferred=inferred_domain,
        question="Custom domain for Pages (blank to use github.io)",
        interactive=interactive,
        prompter=prompter,
    )

    if not owner or not repo_name:
        raise ConfigurationError("could not determine GitHub user or repo name (use --user/--repo)")

    return Configuration(
        owner=owner,
        repo_name=repo_name,
        domain=domain,
        assume_yes=flags.assume_yes,
        regen_readme=flags.regen_readme,
    )
