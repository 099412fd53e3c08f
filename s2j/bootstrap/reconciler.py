from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config import BootstrapSettings
from ..contracts import ChecksumComputer, Prompter, VersionControlClient
from ..errors import DegradedComputationError, MissingArtifactError
from ..models import BootstrapState, Configuration, DerivedValues, InitFlags, ReadmeAction
from ..utils.fs import read_text_or_none, write_if_changed
from .derive import DOWNLOAD_SCRIPT, DOWNLOAD_SCRIPT_PS, derive_urls
from .readme import reconcile_readme, wants_fresh_readme
from .render import (
    SHA_UNAVAILABLE,
    download_script_substitutions,
    powershell_script_substitutions,
    readme_placeholder_substitutions,
    render_artifact,
    render_index_html,
    render_readme_block,
    render_short_readme,
)
from .resolve import resolve_configuration, resolve_decision
from .state import StateStore


REPO_URL_FILE = "repo_url.txt"
INDEX_FILE = "index.html"


@dataclass(frozen=True)
class InitResult:
    config: Configuration
    derived: DerivedValues
    sha256: str
    readme_action: ReadmeAction
    first_run: bool
    state: BootstrapState
    changed: List[str]


class BootstrapReconciler:
    """Personalize a template repository and keep its generated artifacts in sync."""

    def __init__(
        self,
        *,
        root: Path,
        settings: BootstrapSettings,
        vcs: VersionControlClient,
        checksum: ChecksumComputer,
        prompter: Optional[Prompter] = None,
        state_store: Optional[StateStore] = None,
    ):
        self.root = root
        self.settings = settings
        self.vcs = vcs
        self.checksum = checksum
        self.prompter = prompter
        self.state = state_store or StateStore(settings.state_path(root))

    @property
    def util_dir(self) -> Path:
        return self.settings.util_path(self.root)

    def _rel(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.root))
        except ValueError:
            return str(path)

    def check_preconditions(self) -> None:
        """Fail before any write if a required template file is missing."""
        missing: List[Path] = []
        if not self.util_dir.is_dir():
            missing.append(self.util_dir)
        elif not (self.util_dir / DOWNLOAD_SCRIPT).is_file():
            missing.append(self.util_dir / DOWNLOAD_SCRIPT)
        if missing:
            raise MissingArtifactError([self._rel(p) for p in missing])

    def compute_sha(self, path: Path) -> str:
        try:
            return self.checksum.sha256_file(path)
        except DegradedComputationError as e:
            print(f"[init][WARN] {e}")
            return SHA_UNAVAILABLE

    def _write(self, path: Path, text: str, changed: List[str]) -> None:
        if write_if_changed(path, text):
            changed.append(self._rel(path))
            print(f"[init] wrote {self._rel(path)}")
        else:
            print(f"[init] {self._rel(path)} already up to date")

    def _patch_script(self, path: Path, substitutions: dict, changed: List[str]) -> None:
        text = read_text_or_none(path) or ""
        self._write(path, render_artifact(text, substitutions), changed)

    def _warn_if_repointed(self, previous: Optional[BootstrapState], derived: DerivedValues) -> None:
        if previous is None or not previous.repo_url or previous.repo_url == derived.repo_url:
            return
        print(
            f"[init][WARN] download scripts were already bootstrapped for {previous.repo_url}; "
            f"restore {self.settings.util_dir}/{DOWNLOAD_SCRIPT} from the template to point them at {derived.repo_url}"
        )

    def _backup_readme(self, readme: Path) -> None:
        template = self.settings.readme_template_path(self.root)
        if template.exists():
            rotated = template.with_name(template.name + ".bak")
            template.replace(rotated)
            print(f"[init] moved previous {self._rel(template)} to {self._rel(rotated)}")
        readme.replace(template)
        print(f"[init] saved {self._rel(readme)} as {self._rel(template)}")

    def run_init(self, flags: InitFlags) -> InitResult:
        self.check_preconditions()

        cfg = resolve_configuration(
            flags,
            root=self.root,
            vcs=self.vcs,
            util_dir=self.settings.util_dir,
            prompter=self.prompter,
        )
        derived = derive_urls(cfg)

        print("\nConfiguring with:")
        print(f"  GitHub repo: {derived.repo_url}")
        print(f"  Pages base:  {derived.pages_base}")
        print(f"  One-liner:   {derived.download_cmd}")

        previous = self.state.read()
        first_run = not self.state.exists()
        changed: List[str] = []

        dl_sh = self.util_dir / DOWNLOAD_SCRIPT
        dl_ps1 = self.util_dir / DOWNLOAD_SCRIPT_PS
        include_ps = dl_ps1.is_file()

        self._warn_if_repointed(previous, derived)
        self._patch_script(dl_sh, download_script_substitutions(derived), changed)
        if include_ps:
            self._patch_script(dl_ps1, powershell_script_substitutions(derived), changed)
        else:
            print(f"[init] no {self.settings.util_dir}/{DOWNLOAD_SCRIPT_PS}; skipping PowerShell script")

        self._write(self.util_dir / REPO_URL_FILE, derived.repo_url + "\n", changed)

        sha = self.compute_sha(dl_sh)
        self._write(self.util_dir / INDEX_FILE, render_index_html(cfg, derived, sha, include_powershell=include_ps), changed)

        readme_action = self._reconcile_readme(cfg, derived, sha, first_run=first_run, include_ps=include_ps, changed=changed)

        state = self.state.write_state(cfg, derived, sha)
        print(f"[init] recorded bootstrap state in {self._rel(self.state.path)}")

        print("\nDone. Next steps:")
        print("  1) Commit and push these changes to GitHub.")
        print("  2) Ensure GitHub Pages is set to 'Deploy from GitHub Actions'.")
        print("  3) Wait for the Pages deployment workflow to finish.")
        print(f"  4) Share this one-liner:\n\n   {derived.download_cmd}\n")

        return InitResult(
            config=cfg,
            derived=derived,
            sha256=sha,
            readme_action=readme_action,
            first_run=first_run,
            state=state,
            changed=changed,
        )

    def _reconcile_readme(
        self,
        cfg: Configuration,
        derived: DerivedValues,
        sha: str,
        *,
        first_run: bool,
        include_ps: bool,
        changed: List[str],
    ) -> ReadmeAction:
        readme = self.settings.readme_path(self.root)
        document = read_text_or_none(readme)

        replace = False
        if document is not None and wants_fresh_readme(first_run, cfg.regen_readme):
            replace = resolve_decision(
                override="yes" if cfg.assume_yes else None,
                question=(
                    "Replace the template README with a short project README "
                    f"(and save the template as {self.settings.readme_template})?"
                ),
                default=True,
                prompter=self.prompter,
            )
        elif document is not None:
            print(f"[init] bootstrap state found at {self._rel(self.state.path)}; updating the Quick install block only")

        block = render_readme_block(derived, sha, include_powershell=include_ps)
        outcome = reconcile_readme(
            document,
            block,
            first_run,
            cfg.regen_readme,
            replace=replace,
            short_readme=render_short_readme(cfg, block, self.settings.readme_template, self.settings.util_dir),
            placeholders=readme_placeholder_substitutions(cfg, derived, sha),
        )

        if outcome.backup:
            self._backup_readme(readme)
        self._write(readme, outcome.text, changed)
        print(f"[init] README: {outcome.action.replace('_', ' ')}")
        return outcome.action

    def reset(self, reinit: Optional[InitFlags] = None) -> Optional[InitResult]:
        """Return the repository to its template state.

        Deletes the state record and restores the saved template README (edits to
        the generated README are lost). With `reinit`, bootstraps again; its
        preconditions are checked before anything is removed.
        """
        if reinit is not None:
            self.check_preconditions()

        print("[reset] Resetting to template state...")
        if self.state.delete():
            print(f"[reset] removed bootstrap state {self._rel(self.state.path)}")

        readme = self.settings.readme_path(self.root)
        template = self.settings.readme_template_path(self.root)
        if template.is_file():
            template.replace(readme)
            print(f"[reset] restored {self._rel(readme)} from {self._rel(template)}")
        else:
            print(f"[reset][WARN] no {self._rel(template)} found; keeping current {self._rel(readme)}")

        if reinit is None:
            print("[reset] Reset complete. To re-initialize, run: s2j init [--user <user>] [--repo <repo>] [--yes]")
            return None

        print("[reset] Re-running initialization...")
        return self.run_init(reinit)
