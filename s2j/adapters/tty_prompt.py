from __future__ import annotations

import sys
from typing import Optional, TextIO

from ..contracts import Prompter


class TtyPrompter(Prompter):
    """Prompter reading from the controlling terminal.

    When stdin is not a tty (e.g. the script was piped into a shell), /dev/tty is
    opened explicitly. Without any terminal, `ask` returns None.
    """

    def __init__(self, tty_path: str = "/dev/tty"):
        self.tty_path = tty_path

    def _open_terminal(self) -> Optional[TextIO]:
        try:
            return open(self.tty_path, "r+", encoding="utf-8")
        except OSError:
            return None

    def ask(self, question: str, default: str = "") -> Optional[str]:
        prompt = f"{question} [{default}]: " if default else f"{question}: "

        if sys.stdin is not None and sys.stdin.isatty():
            try:
                answer = input(prompt)
            except EOFError:
                return None
            return answer.strip() or default

        tty = self._open_terminal()
        if tty is None:
            return None
        with tty:
            tty.write(prompt)
            tty.flush()
            line = tty.readline()
        if not line:
            return None
        return line.strip() or default
