from __future__ import annotations

from pathlib import Path

from ..contracts import ChecksumComputer
from ..errors import DegradedComputationError
from ..utils.hashing import sha256_file


class HashlibChecksum(ChecksumComputer):
    def sha256_file(self, path: Path) -> str:
        try:
            return sha256_file(path)
        except OSError as e:
            raise DegradedComputationError(f"cannot hash {path}: {e}") from e
