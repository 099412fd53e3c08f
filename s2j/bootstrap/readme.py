"""README reconciliation.

Two persisted states drive this module: NO_STATE (no bootstrap state record)
and BOOTSTRAPPED. The state machine:

- first run, or re-run with --regen-readme: when `replace` is chosen, the old
  README is backed up and a short README is materialized; otherwise the
  delimited block is patched in place (appended when markers are missing).
- re-run without --regen-readme: only the delimited block is refreshed. A README
  still carrying placeholder tokens gets placeholder substitution instead.
- a missing README is always materialized from the short template.

Everything here is pure text-in/text-out. File moves happen in the reconciler.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from ..config import README_BLOCK_END, README_BLOCK_START
from ..models import ReadmeOutcome
from .render import render_artifact


QUICK_INSTALL_HEADING = "## Quick install"


def find_block(lines: List[str]) -> Optional[Tuple[int, int]]:
    """Line indexes (start, end) of the delimited block, inclusive, or None.

    The end is the first end marker; the start is the last start marker before it.
    """
    end = next((i for i, ln in enumerate(lines) if ln.strip() == README_BLOCK_END), None)
    if end is None:
        return None
    start = None
    for i in range(end - 1, -1, -1):
        if lines[i].strip() == README_BLOCK_START:
            start = i
            break
    if start is None:
        return None
    return start, end


def has_block(document: str) -> bool:
    return find_block(document.splitlines()) is not None


def _line_ending(line: str) -> str:
    return line[len(line.rstrip("\r\n")):]


def replace_block(document: str, block: str) -> str:
    """Replace the delimited region (markers included) with `block`.

    Content outside the markers is preserved byte for byte. Raises ValueError
    when the document has no complete block.
    """
    lines = document.splitlines(keepends=True)
    span = find_block([ln.rstrip("\r\n") for ln in lines])
    if span is None:
        raise ValueError("document has no delimited block")
    start, end = span

    # Inner lines follow the start marker's line ending; the end marker keeps its own.
    eol = _line_ending(lines[start]) or "\n"
    new_block = eol.join(block.split("\n")) + _line_ending(lines[end])
    return "".join(lines[:start]) + new_block + "".join(lines[end + 1:])


def append_block(document: str, block: str) -> str:
    out = document
    if out and not out.endswith("\n"):
        out += "\n"
    return f"{out}\n{QUICK_INSTALL_HEADING}\n\n{block}\n"


def has_placeholders(document: str, placeholders: Mapping[str, str]) -> bool:
    return any(token in document for token in placeholders)


def patch_in_place(document: str, block: str) -> ReadmeOutcome:
    if has_block(document):
        return ReadmeOutcome(action="patch_block", text=replace_block(document, block))
    return ReadmeOutcome(action="append_block", text=append_block(document, block))


def wants_fresh_readme(is_first_run: bool, regenerate: bool) -> bool:
    """True when the replace/keep decision applies to this run."""
    return is_first_run or regenerate


def reconcile_readme(
    document: Optional[str],
    block: str,
    is_first_run: bool,
    regenerate: bool,
    *,
    replace: bool,
    short_readme: str,
    placeholders: Mapping[str, str],
) -> ReadmeOutcome:
    """Decide how the README changes and return its new text.

    Args:
        document: current README text, or None when the file does not exist.
        block: rendered delimited block (markers included).
        is_first_run: no bootstrap state record exists.
        regenerate: --regen-readme was given.
        replace: outcome of the replace/keep decision; only consulted when
            `wants_fresh_readme(is_first_run, regenerate)` holds.
        short_readme: fully rendered short README.
        placeholders: token -> value map for READMEs never fully materialized.
    """
    if document is None:
        return ReadmeOutcome(action="replace", text=short_readme, backup=False)

    if wants_fresh_readme(is_first_run, regenerate):
        if replace:
            return ReadmeOutcome(action="replace", text=short_readme, backup=True)
        return patch_in_place(document, block)

    if not has_block(document) and has_placeholders(document, placeholders):
        return ReadmeOutcome(action="substitute_placeholders", text=render_artifact(document, placeholders))

    return patch_in_place(document, block)
