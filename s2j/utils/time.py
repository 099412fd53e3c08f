from __future__ import annotations

from datetime import datetime, timezone


def utcnow_iso() -> str:
    """UTC now as ISO-8601 with second precision, e.g. 2024-01-31T12:00:00Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
