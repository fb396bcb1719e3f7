"""Ignore-rule parsing for tree rendering.

Rules come from a line-oriented file (``.treeignore`` by default). A rule
ending with ``/`` is *shallow*: the path stays visible but its contents are
not expanded. Every other rule is *deep*: the path and everything beneath it
disappear from the walk entirely.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def compile_rule(rule: str) -> re.Pattern[str]:
    """Compile one rule into a prefix-anchored pattern.

    The pattern matches the rule itself or the rule followed by ``/``, so
    ``dist`` hides ``dist`` and ``dist/out.js`` but not ``distro``.
    """
    escaped = re.escape(rule)
    if escaped.endswith("/"):
        escaped = escaped[:-1]
    return re.compile(f"^{escaped}(/|$)")


@dataclass(frozen=True)
class IgnoreRules:
    """Compiled deep and shallow rule sets.

    Paths passed to the predicates are root-relative POSIX paths without a
    trailing slash (see ``mdtree.file_tree_model.paths.relative_posix``).
    """

    deep: tuple[re.Pattern[str], ...] = field(default_factory=tuple)
    shallow: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    def is_deep_ignored(self, relative_path: str) -> bool:
        """Return whether ``relative_path`` is hidden from the walk entirely."""
        return any(pattern.match(relative_path) for pattern in self.deep)

    def is_shallow_ignored(self, relative_path: str) -> bool:
        """Return whether ``relative_path`` is shown but not expanded."""
        return any(pattern.match(relative_path) for pattern in self.shallow)


def parse_ignore_rules(text: str) -> IgnoreRules:
    """Parse ignore-file text into deep and shallow pattern sets."""
    deep: list[re.Pattern[str]] = []
    shallow: list[re.Pattern[str]] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        pattern = compile_rule(stripped)
        if stripped.endswith("/"):
            shallow.append(pattern)
        else:
            deep.append(pattern)
    return IgnoreRules(deep=tuple(deep), shallow=tuple(shallow))


def load_ignore_rules(path: Path) -> IgnoreRules:
    """Load rules from ``path``.

    A missing file means "no rules". Any other read failure is reported as a
    warning and also yields empty rules, so this never raises.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No ignore file at %s; nothing is ignored.", path)
        return IgnoreRules()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Warning: Could not read ignore file at: %s (%s).", path, exc)
        return IgnoreRules()
    rules = parse_ignore_rules(text)
    logger.debug(
        "Loaded %d deep and %d shallow ignore rules from %s.",
        len(rules.deep),
        len(rules.shallow),
        path,
    )
    return rules


__all__ = [
    "IgnoreRules",
    "compile_rule",
    "parse_ignore_rules",
    "load_ignore_rules",
]
