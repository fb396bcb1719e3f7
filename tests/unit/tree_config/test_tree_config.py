"""Tests for run configuration loading and defaults."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mdtree import config
from mdtree.document import TREE_END_TAG, TREE_START_TAG
from mdtree.errors import ConfigMissing


class LoadConfigTests(unittest.TestCase):
    def test_project_config_paths_resolve_against_base_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            (base / config.PROJECT_CONFIG_FILENAME).write_text(
                json.dumps({"root": "src", "targetFile": "docs/INDEX.md"}),
                encoding="utf-8",
            )

            loaded = config.load_config(base_dir=base)

        self.assertEqual(loaded.root, base / "src")
        self.assertEqual(loaded.target_file, base / "docs" / "INDEX.md")
        self.assertEqual(loaded.descriptions_file, base / "tree-descriptions.yml")
        self.assertEqual(loaded.ignore_file, base / ".treeignore")
        self.assertEqual(loaded.start_marker, TREE_START_TAG)
        self.assertEqual(loaded.end_marker, TREE_END_TAG)

    def test_wrong_value_types_fall_back_per_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            (base / config.PROJECT_CONFIG_FILENAME).write_text(
                json.dumps({"root": 42, "targetFile": "", "ignoreFile": "rules.txt", "startMarker": ["x"]}),
                encoding="utf-8",
            )

            loaded = config.load_config(base_dir=base)

        self.assertEqual(loaded.root, base)
        self.assertEqual(loaded.target_file, base / "README.md")
        self.assertEqual(loaded.ignore_file, base / "rules.txt")
        self.assertEqual(loaded.start_marker, TREE_START_TAG)

    def test_malformed_json_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            (base / config.PROJECT_CONFIG_FILENAME).write_text("{not json", encoding="utf-8")

            with self.assertLogs("mdtree.config", level="WARNING"):
                loaded = config.load_config(base_dir=base)

        self.assertEqual(loaded.target_file, base / "README.md")

    def test_missing_config_raises_config_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            user_path = base / "user" / "config.json"
            with mock.patch("mdtree.config.USER_CONFIG_PATH", user_path):
                with self.assertRaises(ConfigMissing) as caught:
                    config.load_config(base_dir=base)

        self.assertEqual(caught.exception.searched, (base / config.PROJECT_CONFIG_FILENAME, user_path))

    def test_user_config_used_when_project_config_absent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            user_path = base / "user" / "config.json"
            user_path.parent.mkdir()
            user_path.write_text(json.dumps({"targetFile": "DOCS.md"}), encoding="utf-8")
            with mock.patch("mdtree.config.USER_CONFIG_PATH", user_path):
                loaded = config.load_config(base_dir=base)

        self.assertEqual(loaded.target_file, base / "DOCS.md")

    def test_explicit_missing_path_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigMissing):
                config.load_config(Path(tmp) / "nope.json", base_dir=Path(tmp))

    def test_with_overrides_replaces_only_given_paths(self) -> None:
        base = config.config_from_data({}, Path("/repo"))

        updated = base.with_overrides(target_file=Path("/repo/OTHER.md"))

        self.assertEqual(updated.target_file, Path("/repo/OTHER.md"))
        self.assertEqual(updated.root, base.root)
        self.assertEqual(updated.ignore_file, base.ignore_file)

    def test_default_config_text_is_valid_json(self) -> None:
        data = json.loads(config.default_config_text())

        self.assertEqual(data["targetFile"], "README.md")
        self.assertEqual(data["descriptionsFile"], "tree-descriptions.yml")


if __name__ == "__main__":
    unittest.main()
