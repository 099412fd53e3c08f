from __future__ import annotations

import html
from typing import Dict, Mapping

from ..config import README_BLOCK_END, README_BLOCK_START
from ..models import Configuration, DerivedValues


REPO_URL_PLACEHOLDER = "__REPO_URL__"

# Assignment lines in the download scripts. Only the first one is rewritten so the
# scripts can keep comparing against the literal placeholder further down.
DL_SH_TOKEN = f'REPO_URL="{REPO_URL_PLACEHOLDER}"'
DL_PS1_TOKEN = f'$RepoUrl = "{REPO_URL_PLACEHOLDER}"'

# Tokens a README may carry when it was never fully materialized.
README_PLACEHOLDERS = ("__REPO_NAME__", "__DOWNLOAD_CMD__", "__DL_SH_SHA256__")

SHA_UNAVAILABLE = "(unable to compute SHA-256 of dl.sh)"


def render_artifact(template: str, substitutions: Mapping[str, str]) -> str:
    """Substitute the FIRST occurrence of each placeholder.

    Later occurrences are left alone, so a template may show a placeholder
    literally (e.g. in a comparison or as documentation).
    """
    out = template
    for token, value in substitutions.items():
        out = out.replace(token, value, 1)
    return out


def download_script_substitutions(derived: DerivedValues) -> Dict[str, str]:
    return {DL_SH_TOKEN: f'REPO_URL="{derived.repo_url}"'}


def powershell_script_substitutions(derived: DerivedValues) -> Dict[str, str]:
    return {DL_PS1_TOKEN: f'$RepoUrl = "{derived.repo_url}"'}


def readme_placeholder_substitutions(cfg: Configuration, derived: DerivedValues, sha: str) -> Dict[str, str]:
    return dict(zip(README_PLACEHOLDERS, (cfg.repo_name, derived.download_cmd, sha)))


def render_readme_block(derived: DerivedValues, sha: str, *, include_powershell: bool = False) -> str:
    """Quick-install block, markers included, without a trailing newline."""
    lines = [
        README_BLOCK_START,
        "Run this in a terminal to clone and set up the project:",
        "",
        "```zsh",
        derived.download_cmd,
        "```",
        "",
    ]
    if include_powershell:
        lines += [
            "On Windows (PowerShell):",
            "",
            "```powershell",
            derived.download_cmd_ps,
            "```",
            "",
        ]
    lines += [
        "Integrity (SHA256 of dl.sh):",
        "",
        "```text",
        sha,
        "```",
        "",
        "This block is auto-generated by `s2j init`. Edits between the markers are overwritten.",
        README_BLOCK_END,
    ]
    return "\n".join(lines)


def render_short_readme(cfg: Configuration, block: str, readme_template_name: str, util_dir: str) -> str:
    return f"""# {cfg.repo_name}

Brief description: Replace this paragraph with a short overview of your dataset and experiment goals. Include links to data sources if public, and summarize the key questions you answer.

## Quick install

{block}

## Project notes

- Data: Describe where data comes from and any preprocessing requirements.
- Experiment: Outline the main analysis/experiment steps and expected outputs.
- Environment: Dependencies are managed with uv (run `s2j setup`).

## Next steps

- Edit this README to document your specific analysis.
- See the original template guide in {readme_template_name} for advanced usage and maintenance tips.
- Optionally delete {readme_template_name} and {util_dir}/template_images/ (keep the other files in {util_dir}/).
"""


def render_index_html(cfg: Configuration, derived: DerivedValues, sha: str, *, include_powershell: bool = False) -> str:
    e = html.escape
    repo = e(cfg.repo_name)
    base = e(derived.pages_base)

    ps_section = ""
    if include_powershell:
        ps_section = (
            "\n\t<p>On Windows (PowerShell):</p>\n"
            f"\t<pre><code>{e(derived.download_cmd_ps)}</code></pre>"
        )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
\t<meta charset="UTF-8" />
\t<meta name="viewport" content="width=device-width, initial-scale=1.0" />
\t<title>{repo} - bootstrap</title>
\t<style>
\t\tbody {{ font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; max-width: 800px; margin: 2rem auto; padding: 0 1rem; }}
\t\tcode, pre {{ background: #f6f8fa; padding: .2rem .4rem; border-radius: 4px; }}
\t\tpre {{ padding: .75rem 1rem; overflow-x: auto; }}
\t\t.muted {{ color: #6a737d; }}
\t</style>
\t<link rel="canonical" href="{base}/" />
\t<meta name="robots" content="noindex" />
\t<meta name="description" content="Bootstrap script for {e(cfg.owner)}/{repo}" />
\t<meta property="og:title" content="{repo} - bootstrap" />
\t<meta property="og:description" content="Run a single command to clone and set up the repo." />
\t<meta property="og:url" content="{base}/" />
\t<meta property="og:type" content="website" />
\t<link rel="icon" href="data:;base64,iVBORw0KGgo=" />
\t<meta http-equiv="Referrer-Policy" content="no-referrer" />
\t<meta http-equiv="Content-Security-Policy" content="default-src 'none'; style-src 'unsafe-inline';" />
</head>
<body>
\t<h1>Bootstrap {repo}</h1>
\t<p>Run this one-liner in a terminal:</p>
\t<pre><code>{e(derived.download_cmd)}</code></pre>{ps_section}
\t<p class="muted">Integrity (SHA256 of dl.sh): <code>{e(sha)}</code></p>
\t<p class="muted">This downloads <code>dl.sh</code> from GitHub Pages and runs it.</p>
\t<p>
\t\t&bull; <a href="{base}/dl.sh">dl.sh</a> &nbsp;&bull;&nbsp;
\t\t<a href="{e(derived.repo_web_url)}">Repository on GitHub</a>
\t</p>
</body>
</html>
"""
