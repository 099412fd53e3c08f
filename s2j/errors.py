from __future__ import annotations


class BootstrapError(Exception):
    """Base class for bootstrap toolkit errors."""


class ConfigurationError(BootstrapError):
    """Raised when owner/repo (or another required setting) cannot be resolved."""


class MissingArtifactError(BootstrapError):
    """Raised when a required template or entrypoint file is absent.

    Always raised before any file is modified.
    """

    def __init__(self, missing: list) -> None:
        self.missing = [str(p) for p in missing]
        super().__init__("required file(s) not found: " + ", ".join(self.missing))


class DegradedComputationError(BootstrapError):
    """Raised when a derived value (e.g. a checksum) cannot be computed.

    Callers recover locally with a placeholder value.
    """


class ExternalToolFailure(BootstrapError):
    """Raised when an external tool subprocess exits non-zero."""

    def __init__(self, cmd: list, returncode: int, stderr: str = "") -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr and stderr.strip() else ""
        super().__init__(f"{' '.join(self.cmd)} exited with {returncode}{detail}")
