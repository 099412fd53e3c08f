from __future__ import annotations

from ..models import Configuration, DerivedValues


GITHUB_HOST = "https://github.com"
DOWNLOAD_SCRIPT = "dl.sh"
DOWNLOAD_SCRIPT_PS = "dl.ps1"


def pages_base_url(cfg: Configuration) -> str:
    if cfg.domain:
        return f"https://{cfg.domain}"
    return f"https://{cfg.owner}.github.io/{cfg.repo_name}"


def derive_urls(cfg: Configuration) -> DerivedValues:
    """Compute URLs and install one-liners. Inputs are not validated."""
    pages_base = pages_base_url(cfg)
    return DerivedValues(
        repo_url=f"{GITHUB_HOST}/{cfg.owner}/{cfg.repo_name}.git",
        repo_web_url=f"{GITHUB_HOST}/{cfg.owner}/{cfg.repo_name}",
        pages_base=pages_base,
        download_cmd=f"curl -fsSL {pages_base}/{DOWNLOAD_SCRIPT} | bash",
        download_cmd_ps=f"irm {pages_base}/{DOWNLOAD_SCRIPT_PS} | iex",
    )
