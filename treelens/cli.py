"""Command-line front door for treelens.

Parses CLI options, merges them over persisted config defaults, walks the
target directory, and prints either a sorted tree listing or a diff against
a saved snapshot.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .diff import DEFAULT_MOVE_THRESHOLD, DiffOptions, diff_snapshots, format_change_set, parse_show_only
from .errors import ConfigError, TreeLensError
from .file_tree_model import load_snapshot, save_snapshot, walk_directory
from .tree_model import (
    DirectoryOrder,
    ListingOptions,
    NodeRecord,
    SortKey,
    SortOptions,
    filter_records,
    format_tree_lines,
    process_records,
)

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treelens",
        description="List a directory tree with flexible sorting, or diff it against a saved snapshot.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to scan. Defaults to current directory.")

    listing = parser.add_argument_group("listing")
    listing.add_argument(
        "--sort",
        default=None,
        help=f"Sort key ({', '.join(key.value for key in SortKey)}).",
    )
    order = listing.add_mutually_exclusive_group()
    order.add_argument("--dirs-first", action="store_true", help="List directories before other entries.")
    order.add_argument("--files-first", action="store_true", help="List other entries before directories.")
    listing.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")
    listing.add_argument("-I", "--include", action="append", default=[], metavar="GLOB", help="Only show files matching GLOB.")
    listing.add_argument("-x", "--exclude", action="append", default=[], metavar="GLOB", help="Hide entries matching GLOB.")
    listing.add_argument("-L", "--max-depth", type=_positive_int, default=None, help="Descend at most N levels.")
    listing.add_argument("-a", "--all", action="store_true", help="Include hidden entries.")
    listing.add_argument("--gitignore", action="store_true", help="Skip entries ignored by git.")
    listing.add_argument("--prune", action="store_true", help="Drop directories left without files.")
    listing.add_argument("-d", "--dirs-only", action="store_true", help="List directories only.")
    listing.add_argument("-s", "--size", action="store_true", help="Show entry sizes.")
    listing.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the chosen sort options as defaults.",
    )

    snapshots = parser.add_argument_group("snapshots")
    snapshots.add_argument("--save-snapshot", metavar="FILE", default=None, help="Write the scan to FILE as JSON and exit.")
    snapshots.add_argument("--diff", metavar="FILE", default=None, help="Compare a saved snapshot with the current scan.")
    snapshots.add_argument("--move-threshold", type=float, default=None, help="Minimum similarity (0-1) to report a move.")
    snapshots.add_argument("--ignore-moves", action="store_true", help="Report moves as removal plus addition.")
    snapshots.add_argument("--show-unchanged", action="store_true", help="Also list unchanged entries.")
    snapshots.add_argument(
        "--show-only",
        action="append",
        default=[],
        metavar="TYPES",
        help="Comma-separated change types to list (added, removed, modified, moved, type_changed, unchanged).",
    )
    snapshots.add_argument("--size-threshold", type=int, default=None, help="Ignore size changes up to N bytes.")
    snapshots.add_argument("--time-threshold", type=float, default=None, help="Ignore mtime changes up to N seconds.")
    snapshots.add_argument("--stats-only", action="store_true", help="Print only the change summary.")

    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def sort_options_from_args(args: argparse.Namespace, saved: dict[str, object]) -> SortOptions:
    """CLI flags win; otherwise fall back to persisted defaults."""
    key = SortKey.from_string(args.sort or config.load_sort_by(saved) or SortKey.NAME.value)
    if key is SortKey.CUSTOM:
        raise ConfigError("sort key 'custom' needs caller-supplied scores; directory scans have none")
    if args.dirs_first:
        directory_order = DirectoryOrder.DIRECTORIES_FIRST
    elif args.files_first:
        directory_order = DirectoryOrder.FILES_FIRST
    else:
        directory_order = DirectoryOrder.from_string(
            config.load_directory_order(saved) or DirectoryOrder.DEFAULT.value
        )
    reverse = args.reverse or config.load_reverse(saved)
    return SortOptions(key=key, directory_order=directory_order, reverse=reverse)


def diff_options_from_args(args: argparse.Namespace, saved: dict[str, object]) -> DiffOptions:
    def pick(value, fallback, default):
        if value is not None:
            return value
        return fallback if fallback is not None else default

    return DiffOptions(
        move_threshold=pick(args.move_threshold, config.load_move_threshold(saved), DEFAULT_MOVE_THRESHOLD),
        size_threshold=pick(args.size_threshold, config.load_size_threshold(saved), 0),
        time_threshold=pick(args.time_threshold, config.load_time_threshold(saved), 0.0),
        ignore_moves=args.ignore_moves,
        show_unchanged=args.show_unchanged,
        show_only=parse_show_only(args.show_only),
    )


def _write_lines(lines: list[str]) -> None:
    sys.stdout.write("".join(f"{line}\n" for line in lines))


def _scoped_records(records: list[NodeRecord], args: argparse.Namespace) -> list[NodeRecord]:
    """Apply the glob, ``-L`` and ``--dirs-only`` filters to a flat record list."""
    scoped = filter_records(records, include=args.include, exclude=args.exclude)
    if args.max_depth is not None:
        scoped = [record for record in scoped if record.depth < args.max_depth]
    if args.dirs_only:
        scoped = [record for record in scoped if record.is_dir]
    return scoped


def run(args: argparse.Namespace, root: Path) -> None:
    logger.debug("scanning %s", root)
    saved = config.load_config()
    show_hidden = args.all or config.load_show_hidden(saved)
    skip_gitignored = args.gitignore or config.load_skip_gitignored(saved)
    depth_limit = None if args.max_depth is None else args.max_depth - 1

    if args.save_snapshot is not None:
        records = walk_directory(root, show_hidden=show_hidden, skip_gitignored=skip_gitignored, max_depth=depth_limit)
        records = _scoped_records(records, args)
        target = Path(args.save_snapshot)
        try:
            save_snapshot(target, records)
        except OSError as exc:
            raise SystemExit(f"Cannot write snapshot {target}: {exc}") from exc
        sys.stderr.write(f"Saved {len(records)} entries to {target}\n")
        return

    if args.diff is not None:
        options = diff_options_from_args(args, saved)
        snapshot_path = Path(args.diff)
        if not snapshot_path.exists():
            raise SystemExit(f"Path not found: {snapshot_path}")
        before = _scoped_records(load_snapshot(snapshot_path), args)
        after = _scoped_records(
            walk_directory(root, show_hidden=show_hidden, skip_gitignored=skip_gitignored, max_depth=depth_limit),
            args,
        )
        change_set = diff_snapshots(before, after, options)
        _write_lines(format_change_set(change_set, show_size=args.size, stats_only=args.stats_only))
        return

    sort = sort_options_from_args(args, saved)
    if args.save_defaults:
        config.save_sort_preferences(sort.key.value, sort.directory_order.value, sort.reverse)
    # Pruning has to see files below the -L cutoff.
    records = walk_directory(
        root,
        show_hidden=show_hidden,
        skip_gitignored=skip_gitignored,
        max_depth=None if args.prune else depth_limit,
        text_stats=sort.key in (SortKey.LINE_COUNT, SortKey.WORD_COUNT),
    )
    if sort.key is SortKey.CREATE_TIME and records and all(record.create_time is None for record in records):
        logger.warning("creation times are unavailable on this platform; entries keep name order")
    listing = process_records(
        records,
        ListingOptions(
            sort=sort,
            include=tuple(args.include),
            exclude=tuple(args.exclude),
            max_depth=depth_limit,
            prune_empty=args.prune,
            directories_only=args.dirs_only,
        ),
    )
    _write_lines(format_tree_lines(listing, root_label=args.path or ".", show_size=args.size))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and list or diff the target directory.

    Library errors surface as ``SystemExit`` messages rather than tracebacks.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    if args.save_snapshot is not None and args.diff is not None:
        raise SystemExit("Cannot combine --save-snapshot with --diff.")

    root = Path(args.path or Path.cwd())
    if not root.exists():
        raise SystemExit(f"Path not found: {root}")
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    try:
        run(args, root)
    except ConfigError as exc:
        raise SystemExit(f"Invalid option: {exc}") from exc
    except TreeLensError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
