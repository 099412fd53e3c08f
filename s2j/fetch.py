from __future__ import annotations

from pathlib import Path
from typing import Optional

from .bootstrap.reconciler import REPO_URL_FILE
from .bootstrap.render import REPO_URL_PLACEHOLDER
from .config import BootstrapSettings
from .contracts import PackageEnvironmentManager, Prompter, VersionControlClient
from .errors import ConfigurationError, MissingArtifactError
from .setup_env import SetupReport, run_setup


def resolve_repo_url(target_dir: Path, explicit: str = "") -> str:
    """Repository to fetch.

    Precedence:
      1) explicit --repo-url
      2) first line of repo_url.txt in `target_dir`
    """
    url = (explicit or "").strip()
    if not url:
        p = target_dir / REPO_URL_FILE
        if p.is_file():
            lines = p.read_text(encoding="utf-8").splitlines()
            url = lines[0].strip() if lines else ""
    if not url or url == REPO_URL_PLACEHOLDER:
        raise ConfigurationError("repository URL is not configured; ask the repo owner to run `s2j init`")
    return url


def fetch_repo(target_dir: Path, repo_url: str, *, vcs: VersionControlClient) -> Path:
    """Pull when `target_dir` is already a working tree, otherwise clone into it."""
    if vcs.is_work_tree(target_dir):
        print(f"[fetch] Detected existing git repository in {target_dir}; pulling latest...")
        vcs.pull(target_dir)
        return target_dir

    print(f"[fetch] Cloning {repo_url} ...")
    return vcs.clone(repo_url, target_dir)


def run_fetch(
    target_dir: Path,
    *,
    vcs: VersionControlClient,
    env: PackageEnvironmentManager,
    settings: BootstrapSettings,
    repo_url: str = "",
    prompter: Optional[Prompter] = None,
    setup: bool = True,
    launch: Optional[bool] = None,
) -> Optional[SetupReport]:
    url = resolve_repo_url(target_dir, repo_url)
    repo_root = fetch_repo(target_dir, url, vcs=vcs)

    if not (repo_root / settings.entrypoint).is_file():
        raise MissingArtifactError([repo_root / settings.entrypoint])

    if not setup:
        print(f"[fetch] Repository ready at {repo_root}. Run `s2j setup` there to create the environment.")
        return None

    return run_setup(repo_root, env=env, settings=settings, prompter=prompter, launch=launch)
