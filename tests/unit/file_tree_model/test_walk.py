"""Tests for filesystem walking and live-path collection."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from mdtree.file_tree_model import DirectoryNode, FileNode, build_file_tree, collect_live_paths, list_directory_children
from mdtree.ignore import IgnoreRules, parse_ignore_rules


def _make_tree(root: Path, paths: list[str]) -> None:
    for raw in paths:
        path = root / raw
        if raw.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x\n", encoding="utf-8")


class BuildFileTreeTests(unittest.TestCase):
    def test_deep_ignored_entries_are_absent_from_children(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["dist/out.js", "src/main.py", "distro.txt"])

            tree = build_file_tree(root, parse_ignore_rules("dist\n"))

            names = [child.name for child in tree.children]
            self.assertEqual(names, ["src", "distro.txt"])

    def test_shallow_ignored_directories_are_still_walked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["node_modules/pkg/index.js"])

            tree = build_file_tree(root, parse_ignore_rules("node_modules/\n"))

            node_modules = tree.children[0]
            self.assertIsInstance(node_modules, DirectoryNode)
            pkg = node_modules.children[0]
            self.assertEqual(pkg.name, "pkg")
            self.assertEqual([child.name for child in pkg.children], ["index.js"])

    def test_directory_with_all_content_ignored_has_empty_children(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["logs/app.log"])

            tree = build_file_tree(root, parse_ignore_rules("logs/app.log\n"))

            logs = tree.children[0]
            self.assertIsInstance(logs, DirectoryNode)
            self.assertEqual(logs.children, ())

    def test_nodes_carry_type_and_root_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["a/", "b.txt"])

            tree = build_file_tree(root, IgnoreRules())

            self.assertEqual(tree.name, root.name)
            self.assertTrue(tree.is_dir)
            self.assertIsInstance(tree.children[0], DirectoryNode)
            self.assertIsInstance(tree.children[1], FileNode)
            self.assertFalse(tree.children[1].is_dir)

    def test_missing_root_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                build_file_tree(Path(tmp) / "missing", IgnoreRules())

    def test_list_directory_children_orders_directories_first(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["zeta.txt", "Alpha/", "beta.txt", "gamma/"])

            children = list_directory_children(root, root, IgnoreRules())

            self.assertEqual([child.name for child in children], ["Alpha", "gamma", "beta.txt", "zeta.txt"])


class CollectLivePathsTests(unittest.TestCase):
    def test_collects_canonical_keys_in_pre_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["a/x.txt", "a/b/y.txt", "top.md"])
            rules = IgnoreRules()

            live = collect_live_paths(build_file_tree(root, rules), root, rules)

            self.assertEqual(live, ["./", "a/", "a/b/", "a/b/y.txt", "a/x.txt", "top.md"])

    def test_shallow_directory_listed_without_descendants(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root, ["node_modules/pkg/index.js", "index.js"])
            rules = parse_ignore_rules("node_modules/\n")

            live = collect_live_paths(build_file_tree(root, rules), root, rules)

            self.assertEqual(live, ["./", "node_modules/", "index.js"])


if __name__ == "__main__":
    unittest.main()
