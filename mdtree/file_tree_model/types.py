"""Domain datatypes for filesystem-backed tree nodes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileNode:
    """Walked file (or symlink/special entry) with no children."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return False


@dataclass(frozen=True)
class DirectoryNode:
    """Walked directory with recursively nested children."""

    path: Path
    children: tuple["TreeNode", ...] = ()

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return True


TreeNode = DirectoryNode | FileNode


__all__ = [
    "FileNode",
    "DirectoryNode",
    "TreeNode",
]
