"""Filesystem scanning and domain-tree construction."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..ignore import IgnoreRules
from .paths import canonical_key, relative_posix
from .types import DirectoryNode, FileNode, TreeNode


@dataclass(frozen=True)
class DirectoryChild:
    """One directory entry that survived deep-ignore filtering."""

    name: str
    path: Path
    is_dir: bool


def child_sort_key(name: str, is_dir: bool) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name with a stable tie-break."""
    return (not is_dir, name.casefold(), name)


def list_directory_children(directory: Path, root: Path, rules: IgnoreRules) -> list[DirectoryChild]:
    """List ``directory`` minus deep-ignored entries, in display order.

    Scan errors propagate: an unreadable directory aborts the run rather than
    silently producing a partial tree.
    """
    children: list[DirectoryChild] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            child_path = Path(entry.path)
            if rules.is_deep_ignored(relative_posix(root, child_path)):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            children.append(DirectoryChild(name=entry.name, path=child_path, is_dir=is_dir))

    children.sort(key=lambda item: child_sort_key(item.name, item.is_dir))
    return children


def build_file_tree(root: Path, rules: IgnoreRules) -> DirectoryNode:
    """Walk ``root`` into a node tree, excluding deep-ignored paths.

    Shallow-ignored directories are still descended into; shallow rules only
    affect what gets listed and rendered.
    """
    root = root.resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    def build_children(directory: Path) -> tuple[TreeNode, ...]:
        nodes: list[TreeNode] = []
        for child in list_directory_children(directory, root, rules):
            if child.is_dir:
                nodes.append(DirectoryNode(path=child.path, children=build_children(child.path)))
            else:
                nodes.append(FileNode(path=child.path))
        return tuple(nodes)

    return DirectoryNode(path=root, children=build_children(root))


def collect_live_paths(root_node: DirectoryNode, root: Path, rules: IgnoreRules) -> list[str]:
    """Return canonical keys of every listed path in pre-order.

    The list starts with ``"./"``. A shallow-ignored directory contributes its
    own key but none of its descendants.
    """
    root = root.resolve()
    live: list[str] = []

    def visit(node: TreeNode) -> None:
        relative = relative_posix(root, node.path)
        live.append(canonical_key(root, node.path, node.is_dir))
        if not isinstance(node, DirectoryNode):
            return
        if relative and rules.is_shallow_ignored(relative):
            return
        for child in node.children:
            visit(child)

    visit(root_node)
    return live


__all__ = [
    "DirectoryChild",
    "child_sort_key",
    "list_directory_children",
    "build_file_tree",
    "collect_live_paths",
]
