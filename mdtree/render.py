"""Render a walked node tree as annotated box-drawing text.

Rendering is split in two steps: ``build_tree_rows`` walks the node tree and
decides order, connectors, prefixes, and descriptions; ``format_tree_rows``
turns those rows into text. Tests can check either half independently.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .file_tree_model import ROOT_KEY, DirectoryNode, TreeNode, canonical_key, child_sort_key, relative_posix
from .ignore import IgnoreRules

BRANCH = "├─ "
LAST_BRANCH = "└─ "
PIPE_PREFIX = "│  "
BLANK_PREFIX = "   "
CODE_FENCE = "```"


@dataclass(frozen=True)
class TreeRow:
    """One output line: indentation prefix, connector, and annotated name."""

    prefix: str
    connector: str
    name: str
    is_dir: bool
    description: str = ""


def annotate(display_name: str, description: str) -> str:
    """Append ``description`` to a display name when it is non-empty."""
    if not description:
        return display_name
    return f"{display_name} # ({description})"


def build_tree_rows(
    node: DirectoryNode,
    root: Path,
    descriptions: dict[str, str],
    rules: IgnoreRules,
    prefix: str = "",
) -> list[TreeRow]:
    """Collect rows for ``node``'s descendants, depth-first and pre-order.

    ``node`` itself is not emitted. Shallow-ignored directories get a row but
    are not expanded.
    """
    root = root.resolve()
    rows: list[TreeRow] = []

    def walk(directory: DirectoryNode, current_prefix: str) -> None:
        children: list[TreeNode] = sorted(
            directory.children,
            key=lambda item: child_sort_key(item.name, item.is_dir),
        )
        for idx, child in enumerate(children):
            last = idx == len(children) - 1
            key = canonical_key(root, child.path, child.is_dir)
            rows.append(
                TreeRow(
                    prefix=current_prefix,
                    connector=LAST_BRANCH if last else BRANCH,
                    name=child.name,
                    is_dir=child.is_dir,
                    description=descriptions.get(key) or "",
                )
            )
            if not isinstance(child, DirectoryNode):
                continue
            if rules.is_shallow_ignored(relative_posix(root, child.path)):
                continue
            walk(child, current_prefix + (BLANK_PREFIX if last else PIPE_PREFIX))

    walk(node, prefix)
    return rows


def format_tree_row(row: TreeRow) -> str:
    suffix = "/" if row.is_dir else ""
    return f"{row.prefix}{row.connector}{annotate(row.name + suffix, row.description)}"


def format_tree_rows(rows: list[TreeRow]) -> str:
    """Join formatted rows with newlines, without a trailing newline."""
    return "\n".join(format_tree_row(row) for row in rows)


def render_root_line(root: Path, descriptions: dict[str, str]) -> str:
    return annotate(f"{root.resolve().name}/", descriptions.get(ROOT_KEY) or "")


def render_tree_block(
    root_node: DirectoryNode,
    root: Path,
    descriptions: dict[str, str],
    rules: IgnoreRules,
) -> str:
    """Render the full fenced block: root line first, then the tree rows."""
    lines = [CODE_FENCE, render_root_line(root, descriptions)]
    body = format_tree_rows(build_tree_rows(root_node, root, descriptions, rules))
    if body:
        lines.append(body)
    lines.append(CODE_FENCE)
    return "\n".join(lines)


__all__ = [
    "BRANCH",
    "LAST_BRANCH",
    "PIPE_PREFIX",
    "BLANK_PREFIX",
    "TreeRow",
    "annotate",
    "build_tree_rows",
    "format_tree_row",
    "format_tree_rows",
    "render_root_line",
    "render_tree_block",
]
