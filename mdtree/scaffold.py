"""First-run scaffolding of config, ignore, descriptions, and target files.

Files that already exist are never overwritten. The target README is created
with markers, or gets markers appended when it exists without them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import (
    DEFAULT_DESCRIPTIONS_FILE,
    DEFAULT_IGNORE_FILE,
    DEFAULT_TARGET_FILE,
    PROJECT_CONFIG_FILENAME,
    default_config_text,
)
from .document import TREE_END_TAG, TREE_START_TAG, append_default_markers, default_marker_block, has_markers

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_TEXT = """\
# Ignore rules file for mdtree

# Rules ending with a "/" are for shallow ignoring.

# --- Shallow Ignore (Folders Only) ---
# appear in the tree, but their contents will not be expanded.
node_modules/
dist/
build/
.vscode/

# --- Complete Ignore (Files & Folders) ---
# will be completely hidden from the tree.
.git
.idea
.DS_Store
"""

DEFAULT_DESCRIPTIONS_TEXT = """\
# Add descriptions for your project's files and folders in this file.
# Format: 'path/': 'your description'
#
# Example:
# './': 'My project root directory'
"""

DEFAULT_DOCUMENT_TITLE = "# My Project Documentation\n"


def _create_exclusive(path: Path, content: str) -> bool:
    """Create ``path`` with ``content`` unless it already exists."""
    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(content)
    except FileExistsError:
        return False
    logger.info("Created: %s", path)
    return True


def initialize_configuration(base_dir: Path) -> list[Path]:
    """Create default project files under ``base_dir``.

    Returns every path that was created or modified.
    """
    touched: list[Path] = []
    defaults = (
        (base_dir / PROJECT_CONFIG_FILENAME, default_config_text()),
        (base_dir / DEFAULT_IGNORE_FILE, DEFAULT_IGNORE_TEXT),
        (base_dir / DEFAULT_DESCRIPTIONS_FILE, DEFAULT_DESCRIPTIONS_TEXT),
    )
    for path, content in defaults:
        if _create_exclusive(path, content):
            touched.append(path)

    target = base_dir / DEFAULT_TARGET_FILE
    if _create_exclusive(target, DEFAULT_DOCUMENT_TITLE + default_marker_block()):
        touched.append(target)
        return touched

    text = target.read_text(encoding="utf-8")
    if not has_markers(text, TREE_START_TAG, TREE_END_TAG):
        logger.info("Appending tags to existing file: %s", target)
        append_default_markers(target)
        touched.append(target)
    return touched


__all__ = [
    "DEFAULT_IGNORE_TEXT",
    "DEFAULT_DESCRIPTIONS_TEXT",
    "initialize_configuration",
]
