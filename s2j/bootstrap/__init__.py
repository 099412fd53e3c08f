from __future__ import annotations

from .derive import derive_urls, pages_base_url
from .readme import append_block, reconcile_readme, replace_block
from .reconciler import BootstrapReconciler, InitResult
from .render import render_artifact
from .resolve import resolve_configuration, resolve_decision
from .state import StateStore

__all__ = [
    "derive_urls",
    "pages_base_url",
    "append_block",
    "reconcile_readme",
    "replace_block",
    "BootstrapReconciler",
    "InitResult",
    "render_artifact",
    "resolve_configuration",
    "resolve_decision",
    "StateStore",
]
