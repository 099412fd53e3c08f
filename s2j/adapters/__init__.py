from __future__ import annotations

from .checksum import HashlibChecksum
from .git_cli import GitCliClient
from .tty_prompt import TtyPrompter
from .uv_env import UvEnvironmentManager

__all__ = [
    "HashlibChecksum",
    "GitCliClient",
    "TtyPrompter",
    "UvEnvironmentManager",
]
