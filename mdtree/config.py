"""JSON run configuration for mdtree.

A project keeps ``tree-config.json`` next to its README. When that file is
absent, a user-level config in the platform config directory is used. Values
with the wrong type fall back to their defaults one key at a time.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .document import TREE_END_TAG, TREE_START_TAG
from .errors import ConfigMissing

logger = logging.getLogger(__name__)

APP_NAME = "mdtree"
PROJECT_CONFIG_FILENAME = "tree-config.json"
USER_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / "config.json"

DEFAULT_ROOT = "."
DEFAULT_TARGET_FILE = "README.md"
DEFAULT_DESCRIPTIONS_FILE = "tree-descriptions.yml"
DEFAULT_IGNORE_FILE = ".treeignore"

_PATH_DEFAULTS = {
    "root": DEFAULT_ROOT,
    "targetFile": DEFAULT_TARGET_FILE,
    "descriptionsFile": DEFAULT_DESCRIPTIONS_FILE,
    "ignoreFile": DEFAULT_IGNORE_FILE,
}
_STRING_DEFAULTS = {
    **_PATH_DEFAULTS,
    "startMarker": TREE_START_TAG,
    "endMarker": TREE_END_TAG,
}


@dataclass(frozen=True)
class TreeConfig:
    """Resolved inputs for one synchronization run."""

    root: Path
    target_file: Path
    descriptions_file: Path
    ignore_file: Path
    start_marker: str = TREE_START_TAG
    end_marker: str = TREE_END_TAG

    def with_overrides(
        self,
        *,
        root: Path | None = None,
        target_file: Path | None = None,
        descriptions_file: Path | None = None,
        ignore_file: Path | None = None,
    ) -> TreeConfig:
        """Return a copy with any non-``None`` path replaced."""
        return TreeConfig(
            root=root if root is not None else self.root,
            target_file=target_file if target_file is not None else self.target_file,
            descriptions_file=descriptions_file if descriptions_file is not None else self.descriptions_file,
            ignore_file=ignore_file if ignore_file is not None else self.ignore_file,
            start_marker=self.start_marker,
            end_marker=self.end_marker,
        )


def default_config_data() -> dict[str, str]:
    return dict(_PATH_DEFAULTS)


def default_config_text() -> str:
    """Return the JSON written for a freshly scaffolded project."""
    return json.dumps(default_config_data(), indent=2) + "\n"


def candidate_config_paths(base_dir: Path) -> tuple[Path, ...]:
    return (base_dir / PROJECT_CONFIG_FILENAME, USER_CONFIG_PATH)


def find_config_path(base_dir: Path) -> Path | None:
    """Return the first existing config path, project before user level."""
    for candidate in candidate_config_paths(base_dir):
        if candidate.is_file():
            return candidate
    return None


def _read_config_data(path: Path) -> dict[str, object]:
    """Read a config object; malformed or non-object JSON reads as ``{}``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning("Config file %s is not valid JSON (%s); using defaults.", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s does not hold a JSON object; using defaults.", path)
        return {}
    return data


def _string_value(data: dict[str, object], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return _STRING_DEFAULTS[key]
    return value


def config_from_data(data: dict[str, object], base_dir: Path) -> TreeConfig:
    """Build a ``TreeConfig`` from raw JSON data, resolving paths under ``base_dir``."""

    def resolve(key: str) -> Path:
        return (base_dir / _string_value(data, key)).resolve()

    return TreeConfig(
        root=resolve("root"),
        target_file=resolve("targetFile"),
        descriptions_file=resolve("descriptionsFile"),
        ignore_file=resolve("ignoreFile"),
        start_marker=_string_value(data, "startMarker"),
        end_marker=_string_value(data, "endMarker"),
    )


def load_config(path: Path | None = None, base_dir: Path | None = None) -> TreeConfig:
    """Load the run configuration.

    With an explicit ``path`` only that file is considered. Otherwise the
    project config in ``base_dir`` (default: current directory) is tried, then
    the user-level config. Raises ``ConfigMissing`` when nothing exists.
    """
    base = (base_dir or Path.cwd()).resolve()
    if path is not None:
        if not path.is_file():
            raise ConfigMissing((path,))
        config_path = path
    else:
        found = find_config_path(base)
        if found is None:
            raise ConfigMissing(candidate_config_paths(base))
        config_path = found
    logger.debug("Using config file %s.", config_path)
    return config_from_data(_read_config_data(config_path), base)


__all__ = [
    "APP_NAME",
    "PROJECT_CONFIG_FILENAME",
    "USER_CONFIG_PATH",
    "TreeConfig",
    "default_config_data",
    "default_config_text",
    "candidate_config_paths",
    "find_config_path",
    "config_from_data",
    "load_config",
]
