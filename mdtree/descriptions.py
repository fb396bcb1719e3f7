"""Description sidecar file: loading, reconciliation, and persistence.

The sidecar is a YAML mapping from canonical path keys to human-written
descriptions. Each run adds blank entries for new paths and moves entries for
vanished paths into a commented archive section at the end of the file.
Archived lines are comments, so YAML loading never sees them; they are carried
over verbatim on every rewrite.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DESCRIPTIONS_HEADER = (
    "# Project structure descriptions\n"
    '# Add a description for each file or directory, formatted as "path/": "description".\n'
    "\n"
)
ARCHIVE_HEADER = "# --- Archived Entries ---"


@dataclass(frozen=True)
class DescriptionsFile:
    """Parsed sidecar content: active mapping plus prior archive lines."""

    descriptions: dict[str, str] = field(default_factory=dict)
    archive_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of diffing a description mapping against the live path set."""

    descriptions: dict[str, str]
    added: tuple[str, ...] = ()
    archived: tuple[tuple[str, str], ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.archived)


def _coerce_descriptions(data: object) -> dict[str, str]:
    """Normalize a YAML document into ``dict[str, str]``.

    Non-mapping documents become ``{}``. ``None`` values (``key:`` with no
    value) become ``""`` and other scalars are stringified.
    """
    if not isinstance(data, dict):
        return {}
    descriptions: dict[str, str] = {}
    for raw_key, raw_value in data.items():
        if raw_key is None:
            continue
        key = str(raw_key)
        if raw_value is None:
            descriptions[key] = ""
        elif isinstance(raw_value, str):
            descriptions[key] = raw_value
        else:
            descriptions[key] = str(raw_value)
    return descriptions


def _split_archive_lines(text: str) -> tuple[str, ...]:
    lines = text.splitlines()
    for idx, line in enumerate(lines):
        if line.strip() == ARCHIVE_HEADER:
            return tuple(item for item in lines[idx + 1 :] if item.lstrip().startswith("#"))
    return ()


def parse_descriptions(text: str) -> DescriptionsFile:
    """Parse sidecar text; YAML errors yield an empty mapping."""
    archive_lines = _split_archive_lines(text)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.warning("Could not parse descriptions, starting from an empty mapping: %s", exc)
        return DescriptionsFile(descriptions={}, archive_lines=archive_lines)
    return DescriptionsFile(descriptions=_coerce_descriptions(data), archive_lines=archive_lines)


def load_descriptions(path: Path) -> DescriptionsFile:
    """Load the sidecar at ``path``.

    Missing or unreadable files are an empty mapping, never an error.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No descriptions file at %s; starting empty.", path)
        return DescriptionsFile()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read descriptions file at %s (%s); starting empty.", path, exc)
        return DescriptionsFile()
    return parse_descriptions(text)


def reconcile_descriptions(descriptions: dict[str, str], live_paths: list[str]) -> ReconcileResult:
    """Diff ``descriptions`` against ``live_paths`` without mutating either.

    ``added`` keeps live-path order; ``archived`` is sorted by key. The
    returned mapping holds exactly the live keys.
    """
    live_set = set(live_paths)
    added = tuple(dict.fromkeys(path for path in live_paths if path not in descriptions))
    removed = sorted(key for key in descriptions if key not in live_set)

    removed_set = set(removed)
    updated = {key: value for key, value in descriptions.items() if key not in removed_set}
    for path in added:
        updated[path] = ""

    archived = tuple((key, descriptions[key]) for key in removed)
    return ReconcileResult(descriptions=updated, added=added, archived=archived)


def format_archive_record(key: str, description: str) -> str:
    """Render one archived entry as a single YAML comment line.

    Key and description are JSON-quoted so newlines and quotes stay escaped
    inside the comment.
    """
    quoted_key = json.dumps(key, ensure_ascii=False)
    quoted_description = json.dumps(description, ensure_ascii=False)
    return f"# {quoted_key}: {quoted_description} # (File deleted)"


def dump_descriptions(descriptions: dict[str, str], archive_lines: tuple[str, ...] = ()) -> str:
    """Serialize the mapping (sorted keys) followed by the archive section."""
    body = yaml.safe_dump(
        descriptions,
        sort_keys=True,
        allow_unicode=True,
        default_flow_style=False,
        indent=2,
    )
    text = DESCRIPTIONS_HEADER + body
    if archive_lines:
        text += "\n" + ARCHIVE_HEADER + "\n" + "\n".join(archive_lines) + "\n"
    return text


def sync_descriptions_file(path: Path, loaded: DescriptionsFile, live_paths: list[str]) -> ReconcileResult:
    """Reconcile ``loaded`` against ``live_paths`` and persist when changed.

    An unchanged path set leaves the file untouched.
    """
    result = reconcile_descriptions(loaded.descriptions, live_paths)
    if result.added:
        logger.info("Found and added %d new paths to %s.", len(result.added), path)
    if result.archived:
        logger.info("Found and archived %d deleted paths in %s.", len(result.archived), path)
    if not result.changed:
        logger.debug("Descriptions in %s are already in sync.", path)
        return result

    archive_lines = loaded.archive_lines + tuple(
        format_archive_record(key, description) for key, description in result.archived
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_descriptions(result.descriptions, archive_lines), encoding="utf-8")
    return result


__all__ = [
    "ARCHIVE_HEADER",
    "DESCRIPTIONS_HEADER",
    "DescriptionsFile",
    "ReconcileResult",
    "parse_descriptions",
    "load_descriptions",
    "reconcile_descriptions",
    "format_archive_record",
    "dump_descriptions",
    "sync_descriptions_file",
]
