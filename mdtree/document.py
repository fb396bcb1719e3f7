"""Marker-delimited region replacement inside the target document."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import MarkersMissing

logger = logging.getLogger(__name__)

TREE_START_TAG = "<!-- TREE_START -->"
TREE_END_TAG = "<!-- TREE_END -->"
GENERATED_NOTICE = "<!-- This tree is automatically generated. Do not edit manually. -->"
PLACEHOLDER_NOTICE = "<!-- Your directory tree will appear here -->"


def default_marker_block(start_marker: str = TREE_START_TAG, end_marker: str = TREE_END_TAG) -> str:
    """Return the block appended to documents that have no markers yet."""
    return f"\n\n{start_marker}\n{PLACEHOLDER_NOTICE}\n{end_marker}\n"


def _marker_span(text: str, start_marker: str, end_marker: str) -> tuple[int, int] | None:
    """Return ``(region_start, region_end)`` strictly between the markers."""
    start_index = text.find(start_marker)
    if start_index < 0:
        return None
    region_start = start_index + len(start_marker)
    end_index = text.find(end_marker, region_start)
    if end_index < 0:
        return None
    return region_start, end_index


def has_markers(text: str, start_marker: str = TREE_START_TAG, end_marker: str = TREE_END_TAG) -> bool:
    return _marker_span(text, start_marker, end_marker) is not None


def patch_document(
    text: str,
    rendered: str,
    start_marker: str = TREE_START_TAG,
    end_marker: str = TREE_END_TAG,
) -> str:
    """Replace the region between the markers with the notice and ``rendered``.

    Everything outside the region, markers included, is preserved. Raises
    ``MarkersMissing`` when the start marker is absent or not followed by the
    end marker.
    """
    span = _marker_span(text, start_marker, end_marker)
    if span is None:
        raise MarkersMissing(start_marker, end_marker)
    region_start, region_end = span
    return f"{text[:region_start]}\n{GENERATED_NOTICE}\n{rendered}\n{text[region_end:]}"


def append_default_markers(
    path: Path,
    start_marker: str = TREE_START_TAG,
    end_marker: str = TREE_END_TAG,
) -> None:
    """Append the placeholder marker block to the end of ``path``."""
    with path.open("a", encoding="utf-8") as handle:
        handle.write(default_marker_block(start_marker, end_marker))
    logger.debug("Appended tree markers to %s.", path)


__all__ = [
    "TREE_START_TAG",
    "TREE_END_TAG",
    "GENERATED_NOTICE",
    "PLACEHOLDER_NOTICE",
    "default_marker_block",
    "has_markers",
    "patch_document",
    "append_default_markers",
]
