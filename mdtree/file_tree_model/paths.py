"""Canonical path keys shared by ignore matching, descriptions, and rendering.

Keys are root-relative and always use ``/``. Directories carry a trailing
slash and the root itself is ``"./"``.
"""

from __future__ import annotations

import os
from pathlib import Path

ROOT_KEY = "./"


def relative_posix(root: Path, path: Path) -> str:
    """Return ``path`` relative to ``root`` with ``/`` separators.

    The root itself maps to ``""``; ignore rules are matched against this form.
    """
    relative = os.path.relpath(path, root)
    if relative == os.curdir:
        return ""
    return relative.replace(os.sep, "/")


def canonical_key(root: Path, path: Path, is_dir: bool) -> str:
    """Return the description-mapping key for ``path`` under ``root``."""
    relative = relative_posix(root, path)
    if not relative:
        return ROOT_KEY
    return f"{relative}/" if is_dir else relative


__all__ = [
    "ROOT_KEY",
    "relative_posix",
    "canonical_key",
]
