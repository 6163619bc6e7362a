"""Tests for the git status overlay.

Porcelain parsing is checked against canned output; one test drives a real
repository when ``git`` is installed.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazytree import git_status
from lazytree.tree_model import DiffType, FileTree, build_node_tree


def _completed(stdout: str, returncode: int = 0) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout)


class PorcelainParsingTests(unittest.TestCase):
    def test_records_skip_rename_sources(self) -> None:
        output = " M a.py\0R  new.py\0old.py\0?? notes.txt\0"
        self.assertEqual(
            git_status.iter_porcelain_records(output),
            [(" M", "a.py"), ("R ", "new.py"), ("??", "notes.txt")],
        )

    def test_status_mapping(self) -> None:
        self.assertEqual(git_status.diff_type_for_status("??"), DiffType.ADDED)
        self.assertEqual(git_status.diff_type_for_status("A "), DiffType.ADDED)
        self.assertEqual(git_status.diff_type_for_status("AM"), DiffType.ADDED)
        self.assertEqual(git_status.diff_type_for_status(" D"), DiffType.REMOVED)
        self.assertEqual(git_status.diff_type_for_status("D "), DiffType.REMOVED)
        self.assertEqual(git_status.diff_type_for_status(" M"), DiffType.MODIFIED)
        self.assertEqual(git_status.diff_type_for_status("R "), DiffType.MODIFIED)

    def test_collect_diff_types_filters_to_tree_root(self) -> None:
        repo = Path("/repo")
        runs = [
            _completed("/repo\n"),
            _completed(" M sub/a.py\0?? sub/new/\0 D top.txt\0"),
        ]
        with mock.patch("lazytree.git_status.subprocess.run", side_effect=runs):
            overlay = git_status.collect_diff_types(repo / "sub")

        self.assertEqual(
            overlay,
            {repo / "sub" / "a.py": DiffType.MODIFIED, repo / "sub" / "new": DiffType.ADDED},
        )

    def test_outside_repository_yields_empty_overlay(self) -> None:
        with mock.patch("lazytree.git_status.subprocess.run", return_value=_completed("", returncode=128)):
            self.assertEqual(git_status.collect_diff_types(Path("/nowhere")), {})

    def test_missing_git_binary_yields_empty_overlay(self) -> None:
        with mock.patch("lazytree.git_status.subprocess.run", side_effect=FileNotFoundError("git")):
            self.assertEqual(git_status.collect_diff_types(Path("/nowhere")), {})


class GitRepositoryTests(unittest.TestCase):
    @unittest.skipIf(shutil.which("git") is None, "git is required for repository overlay tests")
    def test_overlay_marks_added_removed_and_modified_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            subprocess.run(["git", "init", "-q"], cwd=root, check=True)
            subprocess.run(["git", "config", "user.email", "tests@example.com"], cwd=root, check=True)
            subprocess.run(["git", "config", "user.name", "Tests"], cwd=root, check=True)
            (root / "kept.txt").write_text("one\n", encoding="utf-8")
            (root / "dropped.txt").write_text("two\n", encoding="utf-8")
            subprocess.run(["git", "add", "-A"], cwd=root, check=True)
            subprocess.run(["git", "commit", "-q", "-m", "initial"], cwd=root, check=True)

            (root / "kept.txt").write_text("changed\n", encoding="utf-8")
            (root / "dropped.txt").unlink()
            (root / "fresh.txt").write_text("three\n", encoding="utf-8")

            overlay = git_status.collect_diff_types(root, timeout_seconds=5.0)
            tree = FileTree([build_node_tree(root, diff_types=overlay)])

        self.assertEqual(
            overlay,
            {
                root / "kept.txt": DiffType.MODIFIED,
                root / "dropped.txt": DiffType.REMOVED,
                root / "fresh.txt": DiffType.ADDED,
            },
        )
        self.assertEqual(tree.node_for_path("/dropped.txt").diff_type, DiffType.REMOVED)
        self.assertEqual(tree.node_for_path("/fresh.txt").diff_type, DiffType.ADDED)
        self.assertEqual(tree.root.diff_type, DiffType.UNMODIFIED)


if __name__ == "__main__":
    unittest.main()
