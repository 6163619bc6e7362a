"""Command-line front door for lazytree.

Parses CLI options, builds the tree model for the given directories, and
either prints the tree or starts the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .errors import ConfigurationError
from .runtime import run_main_loop
from .terminal import TerminalController
from .tree_model import FileTree
from .tree_view import ATTRIBUTES_MIN_WIDTH, RESYNC_POLICIES, TreeView
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)


def configure_logging(log_file: str | None, level_name: str | None) -> None:
    """Send log records to ``log_file``; the terminal is owned by the UI."""
    if not log_file:
        return
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_tree(tree: FileTree, show_attributes: bool, columns: int) -> str:
    """Return every visible row of the active layer as text."""
    include_attributes = show_attributes and columns > ATTRIBUTES_MIN_WIDTH
    text = tree.string_between(0, tree.visible_size() + 1, include_attributes)
    return text + "\n" if text else ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazytree",
        description="Browse directory trees in the terminal with git change filters.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Directories to browse; each becomes a layer. Defaults to the current directory.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--all", action="store_true", help="Include dot-files and dot-directories.")
    parser.add_argument("--skip-gitignored", action="store_true", help="Omit entries ignored by git.")
    parser.add_argument("--no-git", action="store_true", help="Do not query git for change status.")
    parser.add_argument("--collapsed", action="store_true", help="Start with every directory collapsed.")
    parser.add_argument(
        "--no-attributes",
        action="store_true",
        help="Hide the permission/size column initially.",
    )
    parser.add_argument(
        "--filter-resync",
        choices=RESYNC_POLICIES,
        default=None,
        help="Selection policy after filter toggles (default from config: clamp).",
    )
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the tree and exit.")
    parser.add_argument("--save-defaults", action="store_true", help="Persist theme/attribute/resync choices.")
    parser.add_argument("--log-file", default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--log-level", default=None, help="Logging level for --log-file (default INFO).")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch lazytree."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level or config.load_log_level())

    roots = args.paths or [Path.cwd()]
    for root in roots:
        if not root.is_dir():
            raise SystemExit(f"Not a directory: {root}")

    theme_name = normalize_theme_name(args.theme or config.load_theme_name())
    theme = resolve_theme(theme_name, no_color=args.no_color)
    show_attributes = config.load_show_attributes() and not args.no_attributes
    filter_resync = args.filter_resync or config.load_filter_resync()
    if args.save_defaults:
        config.save_preferences(theme_name, show_attributes, filter_resync)

    tree = FileTree.from_paths(
        roots,
        show_hidden=args.all,
        skip_gitignored=args.skip_gitignored,
        use_git=not args.no_git,
        collapsed=args.collapsed,
        theme=theme,
    )
    view = TreeView(tree, show_attributes=show_attributes, resync_policy=filter_resync)
    try:
        view.setup(config.load_key_bindings())
    except ConfigurationError as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc

    if args.print_only or not sys.stdin.isatty() or not sys.stdout.isatty():
        columns = shutil.get_terminal_size((80, 24)).columns
        sys.stdout.write(print_tree(tree, view.show_attributes, columns))
        return

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    run_main_loop(
        view,
        terminal,
        stdin_fd,
        stdout_fd,
        theme=theme,
        status_label=lambda: tree.layer_label,
    )


if __name__ == "__main__":
    main()
