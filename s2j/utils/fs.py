from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Write text atomically so an interrupted run never leaves a half-written file."""
    ensure_dir(path.parent)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    tmp_path = Path(tmp)
    try:
        # newline="" keeps line endings exactly as given (no CRLF translation on Windows).
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp_path)
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def read_text_or_none(path: Path, encoding: str = "utf-8") -> Optional[str]:
    if not path.is_file():
        return None
    with path.open("r", encoding=encoding, newline="") as f:
        return f.read()


def write_if_changed(path: Path, text: str) -> bool:
    """Atomically write `text` unless the file already holds exactly that.

    Returns True when the file was written.
    """
    if read_text_or_none(path) == text:
        return False
    atomic_write_text(path, text)
    return True
