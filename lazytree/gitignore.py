"""Gitignore-aware path filtering.

Builds a matcher by asking git for ignored files and directories once per
tree build.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .git_status import resolve_repo_root


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Resolved gitignore snapshot for a project subtree."""

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path`` is ignored under this matcher root."""
        if not path.is_relative_to(self.root):
            return False
        if path in self.ignored_files:
            return True
        current = path
        while True:
            if current in self.ignored_dirs:
                return True
            if current == self.root:
                break
            parent = current.parent
            if parent == current:
                break
            current = parent
        return False


def load_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Build a matcher for ``root``; ``None`` when git is unavailable or not a repo."""
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    repo_root = resolve_repo_root(root)
    if repo_root is None or not root.is_relative_to(repo_root):
        return None

    try:
        proc = subprocess.run(
            [
                "git",
                "-C",
                str(repo_root),
                "ls-files",
                "-z",
                "--others",
                "-i",
                "--exclude-standard",
                "--directory",
            ],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.SubprocessError):
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in proc.stdout.split(b"\x00"):
        if not raw:
            continue
        rel = raw.decode("utf-8", errors="replace")
        is_dir = rel.endswith("/")
        rel = rel.rstrip("/")
        if not rel:
            continue
        abs_path = repo_root / rel
        if not abs_path.is_relative_to(root):
            continue
        if is_dir:
            ignored_dirs.add(abs_path)
        else:
            ignored_files.add(abs_path)

    return GitIgnoreMatcher(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )
