from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .errors import ConfigurationError
from .utils.yamlio import read_yaml


CONFIG_ENV_VAR = "S2J_CONFIG"
DEFAULT_CONFIG_NAME = "s2j.yml"

README_BLOCK_START = "<!-- QUICK_INSTALL_START -->"
README_BLOCK_END = "<!-- QUICK_INSTALL_END -->"


@dataclass(frozen=True)
class BootstrapSettings:
    """Repository layout and tool knobs. Paths are relative to the repository root."""

    util_dir: str = "dl-util"
    readme: str = "README.md"
    readme_template: str = "README.template.md"
    state_file: str = ".s2j-state.json"
    kernel_name: str = "project"
    entrypoint: str = "pyproject.toml"
    uv_install_url: str = "https://astral.sh/uv/install.sh"

    def util_path(self, root: Path) -> Path:
        return root / self.util_dir

    def state_path(self, root: Path) -> Path:
        return self.util_path(root) / self.state_file

    def readme_path(self, root: Path) -> Path:
        return root / self.readme

    def readme_template_path(self, root: Path) -> Path:
        return root / self.readme_template


def _settings_schema() -> Dict[str, Any]:
    props = {f.name: {"type": "string", "pattern": r"\S"} for f in fields(BootstrapSettings)}
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": props,
        "additionalProperties": False,
    }


def resolve_settings_path(root: Path, cli_path: Optional[str] = None) -> Optional[Path]:
    """Resolve the settings YAML path.

    Precedence:
      1) CLI flag --config
      2) S2J_CONFIG
      3) <root>/s2j.yml, only if it exists

    Returns None when no settings file applies (built-in defaults).
    """
    if cli_path and str(cli_path).strip():
        return Path(str(cli_path).strip()).expanduser().resolve()

    env_path = str(os.environ.get(CONFIG_ENV_VAR, "") or "").strip()
    if env_path:
        return Path(env_path).expanduser().resolve()

    default = (root / DEFAULT_CONFIG_NAME).resolve()
    return default if default.exists() else None


def load_settings(root: Path, cli_path: Optional[str] = None) -> BootstrapSettings:
    """Load settings, overlaying the optional YAML file on the built-in defaults."""
    path = resolve_settings_path(root, cli_path)
    if path is None:
        return BootstrapSettings()
    if not path.exists():
        raise ConfigurationError(f"settings file not found: {path}")

    try:
        data = read_yaml(path)
        jsonschema.validate(instance=data, schema=_settings_schema())
    except (ValueError, jsonschema.ValidationError) as e:
        raise ConfigurationError(f"invalid settings file {path}: {e}") from e

    return replace(BootstrapSettings(), **{k: str(v).strip() for k, v in data.items()})
