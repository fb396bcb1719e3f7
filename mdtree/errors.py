"""Error taxonomy shared by the synchronization engine and the CLI."""

from __future__ import annotations

from pathlib import Path


class TreeDocError(Exception):
    """Base class for expected failures; ``cli.main`` logs the message and exits 1."""


class ConfigMissing(TreeDocError):
    """No configuration file was found; first-run scaffolding is needed."""

    def __init__(self, searched: tuple[Path, ...]) -> None:
        self.searched = searched
        joined = ", ".join(str(path) for path in searched)
        super().__init__(f"No configuration file found (looked in: {joined})")


class TargetMissing(TreeDocError):
    """The document that should receive the tree does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f'Target file "{path}" does not exist. '
            "Please create it or check your tree-config.json."
        )


class MarkersMissing(TreeDocError):
    """The target text lacks the start marker or a following end marker."""

    def __init__(self, start_marker: str, end_marker: str) -> None:
        self.start_marker = start_marker
        self.end_marker = end_marker
        super().__init__(f"Markers {start_marker!r} ... {end_marker!r} not found in document")


__all__ = [
    "TreeDocError",
    "ConfigMissing",
    "TargetMissing",
    "MarkersMissing",
]
