"""One full synchronization pass: walk, reconcile descriptions, patch document.

The ignore rules and the description sidecar are independent reads and load
in parallel; both are joined before the walk starts. The target document is
rendered entirely in memory and written at most once per run.
"""

from __future__ import annotations

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from .config import TreeConfig
from .descriptions import DescriptionsFile, load_descriptions, reconcile_descriptions, sync_descriptions_file
from .document import append_default_markers, has_markers, patch_document
from .errors import TargetMissing
from .file_tree_model import build_file_tree, collect_live_paths
from .ignore import IgnoreRules, load_ignore_rules
from .render import render_tree_block

logger = logging.getLogger(__name__)


class SyncOutcome(enum.Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    MARKERS_APPENDED = "markers_appended"


@dataclass(frozen=True)
class LoadedInputs:
    rules: IgnoreRules
    descriptions: DescriptionsFile


def load_inputs(config: TreeConfig) -> LoadedInputs:
    """Load ignore rules and descriptions concurrently and join both."""
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="mdtree-load") as executor:
        rules_future = executor.submit(load_ignore_rules, config.ignore_file)
        descriptions_future = executor.submit(load_descriptions, config.descriptions_file)
        return LoadedInputs(rules=rules_future.result(), descriptions=descriptions_future.result())


def read_target(config: TreeConfig) -> str:
    try:
        return config.target_file.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TargetMissing(config.target_file) from exc


def render_preview(config: TreeConfig) -> str:
    """Render the fenced tree block without writing any file."""
    inputs = load_inputs(config)
    root_node = build_file_tree(config.root, inputs.rules)
    live_paths = collect_live_paths(root_node, config.root, inputs.rules)
    result = reconcile_descriptions(inputs.descriptions.descriptions, live_paths)
    return render_tree_block(root_node, config.root, result.descriptions, inputs.rules)


def run_sync(config: TreeConfig) -> SyncOutcome:
    """Run one synchronization pass for ``config``.

    Raises ``TargetMissing`` when the target document does not exist. When the
    document lacks markers they are appended and the run stops early.
    """
    document = read_target(config)
    if not has_markers(document, config.start_marker, config.end_marker):
        logger.info("Tags not found in %s. Appending them now.", config.target_file)
        append_default_markers(config.target_file, config.start_marker, config.end_marker)
        logger.info("Tags appended. Please run the command again to generate the tree.")
        return SyncOutcome.MARKERS_APPENDED

    logger.info("Config and tags found. Starting tree generation...")
    inputs = load_inputs(config)
    root_node = build_file_tree(config.root, inputs.rules)
    live_paths = collect_live_paths(root_node, config.root, inputs.rules)
    result = sync_descriptions_file(config.descriptions_file, inputs.descriptions, live_paths)

    rendered = render_tree_block(root_node, config.root, result.descriptions, inputs.rules)
    patched = patch_document(document, rendered, config.start_marker, config.end_marker)
    if patched == document:
        logger.info("Tree in %s is already up to date.", config.target_file)
        return SyncOutcome.UNCHANGED

    config.target_file.write_text(patched, encoding="utf-8")
    logger.info("Successfully updated tree in %s.", config.target_file)
    return SyncOutcome.UPDATED


__all__ = [
    "SyncOutcome",
    "LoadedInputs",
    "load_inputs",
    "read_target",
    "render_preview",
    "run_sync",
]
