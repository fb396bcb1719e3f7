"""Domain model for walked file/directory trees.

This package contains the non-rendering tree primitives:
- file/directory node datatypes with nested children
- canonical path keys relative to the walked root
- filesystem walking and live-path collection
"""

from __future__ import annotations

from .types import DirectoryNode, FileNode, TreeNode
from .paths import ROOT_KEY, canonical_key, relative_posix
from .fs import (
    DirectoryChild,
    build_file_tree,
    child_sort_key,
    collect_live_paths,
    list_directory_children,
)

__all__ = [
    "DirectoryNode",
    "FileNode",
    "TreeNode",
    "ROOT_KEY",
    "canonical_key",
    "relative_posix",
    "DirectoryChild",
    "child_sort_key",
    "list_directory_children",
    "build_file_tree",
    "collect_live_paths",
]
