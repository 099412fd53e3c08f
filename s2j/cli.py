from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .adapters import GitCliClient, HashlibChecksum, TtyPrompter, UvEnvironmentManager
from .bootstrap.reconciler import BootstrapReconciler
from .config import BootstrapSettings, load_settings
from .errors import BootstrapError
from .fetch import run_fetch
from .models import InitFlags
from .setup_env import run_setup


def _root(args: argparse.Namespace) -> Path:
    return Path(args.root).expanduser().resolve()


def _settings(args: argparse.Namespace) -> BootstrapSettings:
    return load_settings(_root(args), getattr(args, "config", None))


def _init_flags(args: argparse.Namespace) -> InitFlags:
    return InitFlags(
        user=args.user or "",
        repo=args.repo or "",
        domain=args.domain or "",
        assume_yes=bool(args.yes),
        regen_readme=bool(args.regen_readme),
    )


def _reconciler(args: argparse.Namespace) -> BootstrapReconciler:
    return BootstrapReconciler(
        root=_root(args),
        settings=_settings(args),
        vcs=GitCliClient(),
        checksum=HashlibChecksum(),
        prompter=TtyPrompter(),
    )


def cmd_init(args: argparse.Namespace) -> int:
    _reconciler(args).run_init(_init_flags(args))
    return 0


def cmd_reset(args: argparse.Namespace) -> int:
    reinit = _init_flags(args) if args.reinit else None
    _reconciler(args).reset(reinit=reinit)
    return 0


def cmd_setup(args: argparse.Namespace) -> int:
    settings = _settings(args)
    if args.kernel_name:
        settings = replace(settings, kernel_name=args.kernel_name)
    run_setup(
        _root(args),
        env=UvEnvironmentManager(install_url=settings.uv_install_url),
        settings=settings,
        prompter=TtyPrompter(),
        launch=args.jupyter,
    )
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    target = Path(args.dir).expanduser().resolve()
    settings = load_settings(target, args.config)
    run_fetch(
        target,
        vcs=GitCliClient(),
        env=UvEnvironmentManager(install_url=settings.uv_install_url),
        settings=settings,
        repo_url=args.repo_url or "",
        prompter=TtyPrompter(),
        setup=not args.no_setup,
        launch=args.jupyter,
    )
    return 0


def _add_common(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--root", default=".", help="Repository root (default: current directory)")
    sp.add_argument("--config", default=None, help="Settings YAML (default: $S2J_CONFIG or <root>/s2j.yml)")


def _add_init_flags(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--user", default="", help="GitHub username or org (default: inferred from git remote)")
    sp.add_argument("--repo", default="", help="Repository name (default: inferred from git remote or folder)")
    sp.add_argument("--domain", default="", help="Custom domain for GitHub Pages (overrides CNAME / github.io URL)")
    sp.add_argument("-y", "--yes", action="store_true", help="Non-interactive; accept inferred defaults")
    sp.add_argument("--regen-readme", action="store_true", help="Regenerate the short README even if already bootstrapped")


def _add_jupyter_flags(sp: argparse.ArgumentParser) -> None:
    g = sp.add_mutually_exclusive_group()
    g.add_argument("--jupyter", dest="jupyter", action="store_const", const=True, default=None, help="Launch Jupyter Lab after setup")
    g.add_argument("--no-jupyter", dest="jupyter", action="store_const", const=False, help="Do not launch Jupyter Lab")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="s2j", description="Bootstrap a template repository for your GitHub repo and Pages URL")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("init", help="Personalize the template (dl.sh, index.html, README, state)")
    _add_common(sp)
    _add_init_flags(sp)
    sp.set_defaults(func=cmd_init)

    sp = sub.add_parser("reset", help="Remove bootstrap state and restore the template README")
    _add_common(sp)
    sp.add_argument("-r", "--reinit", action="store_true", help="Run init again after resetting")
    _add_init_flags(sp)
    sp.set_defaults(func=cmd_reset)

    sp = sub.add_parser("setup", help="Install uv if needed, sync the environment, optionally start Jupyter Lab")
    _add_common(sp)
    sp.add_argument("--kernel-name", default="", help="IPython kernel name (default from settings)")
    _add_jupyter_flags(sp)
    sp.set_defaults(func=cmd_setup)

    sp = sub.add_parser("fetch", help="Clone (or pull) the repository, then run setup in it")
    sp.add_argument("--repo-url", default="", help="Repository to clone (default: repo_url.txt)")
    sp.add_argument("--dir", default=".", help="Directory to clone into (default: current directory)")
    sp.add_argument("--config", default=None, help="Settings YAML")
    sp.add_argument("--no-setup", action="store_true", help="Only fetch; skip environment setup")
    _add_jupyter_flags(sp)
    sp.set_defaults(func=cmd_fetch)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except BootstrapError as e:
        print(f"[s2j][ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
