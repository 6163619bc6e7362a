"""Git status overlay mapped onto tree diff types.

Runs ``git status --porcelain`` for a tree root and classifies each changed
path as added, removed, or modified. Paths outside the root are dropped.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .tree_model.types import DiffType

logger = logging.getLogger(__name__)


def _run_git(cwd: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed in %s: %s", args[0], cwd, exc)
        return None


def resolve_repo_root(path: Path, timeout_seconds: float = 0.5) -> Path | None:
    """Return the work-tree root containing ``path`` or ``None``."""
    proc = _run_git(path, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top_level = proc.stdout.strip()
    if not top_level:
        return None
    return Path(top_level).resolve()


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``git status --porcelain=v1 -z`` output into ``(status, path)`` pairs."""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        path_text = token[3:]
        records.append((status, path_text))

        # For renamed/copied entries, porcelain -z appends an extra token
        # containing the source path; the first path token is the destination.
        if "R" in status or "C" in status:
            index += 1

    return records


def diff_type_for_status(status: str) -> DiffType:
    """Map a two-letter porcelain status to a ``DiffType``."""
    if status == "??" or "A" in status:
        return DiffType.ADDED
    if "D" in status:
        return DiffType.REMOVED
    return DiffType.MODIFIED


def collect_diff_types(tree_root: Path, timeout_seconds: float = 0.5) -> dict[Path, DiffType]:
    """Return resolved path → ``DiffType`` for changed entries under ``tree_root``."""
    tree_root = tree_root.resolve()
    repo_root = resolve_repo_root(tree_root, timeout_seconds)
    if repo_root is None:
        return {}

    status_proc = _run_git(
        repo_root,
        ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
        timeout_seconds,
    )
    if status_proc is None or status_proc.returncode != 0:
        return {}

    overlay: dict[Path, DiffType] = {}
    for status, rel_path in iter_porcelain_records(status_proc.stdout):
        if not rel_path or status == "!!":
            continue
        target = repo_root / rel_path.rstrip("/")
        if not target.is_relative_to(tree_root):
            continue
        overlay[target] = diff_type_for_status(status)

    logger.debug("collected %d git changes under %s", len(overlay), tree_root)
    return overlay
