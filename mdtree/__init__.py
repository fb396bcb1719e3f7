"""Public package surface for mdtree.

Exports ``main`` for programmatic CLI invocation.
The synchronization engine lives in submodules under ``mdtree``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
