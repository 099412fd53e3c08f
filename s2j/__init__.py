"""Template bootstrap toolkit.

Personalizes a GitHub template repository (owner, repo name, Pages domain),
keeps its download scripts, landing page and README quick-install block in
sync, and sets up the local uv/Jupyter environment.

Entry point: ``s2j`` (see :mod:`s2j.cli`), also runnable as ``python -m s2j``.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.2.0"
