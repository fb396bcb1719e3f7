"""Tests for first-run scaffolding of project files."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from mdtree.document import has_markers
from mdtree.ignore import parse_ignore_rules
from mdtree.scaffold import initialize_configuration


class InitializeConfigurationTests(unittest.TestCase):
    def test_creates_all_default_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()

            touched = initialize_configuration(base)

            self.assertEqual(
                {path.name for path in touched},
                {"tree-config.json", ".treeignore", "tree-descriptions.yml", "README.md"},
            )
            readme = (base / "README.md").read_text(encoding="utf-8")
            self.assertTrue(readme.startswith("# My Project Documentation\n"))
            self.assertTrue(has_markers(readme))
            rules = parse_ignore_rules((base / ".treeignore").read_text(encoding="utf-8"))
            self.assertTrue(rules.is_shallow_ignored("node_modules"))
            self.assertTrue(rules.is_deep_ignored(".git"))

    def test_existing_files_are_not_overwritten(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            (base / ".treeignore").write_text("custom\n", encoding="utf-8")
            (base / "README.md").write_text("# Mine\n", encoding="utf-8")

            touched = initialize_configuration(base)

            self.assertEqual((base / ".treeignore").read_text(encoding="utf-8"), "custom\n")
            readme = (base / "README.md").read_text(encoding="utf-8")
            self.assertTrue(readme.startswith("# Mine\n"))
            self.assertTrue(has_markers(readme))
            self.assertNotIn(base / ".treeignore", touched)
            self.assertIn(base / "README.md", touched)

    def test_readme_with_markers_is_left_alone(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            initialize_configuration(base)
            before = (base / "README.md").read_text(encoding="utf-8")

            touched = initialize_configuration(base)

            self.assertEqual(touched, [])
            self.assertEqual((base / "README.md").read_text(encoding="utf-8"), before)


if __name__ == "__main__":
    unittest.main()
