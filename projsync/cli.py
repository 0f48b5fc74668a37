"""CLI entrypoints for projsync commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .graph import GraphError, load_graph
from .logging import configure_logging
from .synchronizer import Synchronizer
from .writer import WriteFailure


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--graph",
        default=None,
        help="Module graph file (defaults to the configured graph file).",
    )
    parser.add_argument(
        "--generate-all",
        action="store_true",
        default=None,
        help="Also project files that live inside dependency packages.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projsync",
        description="Generate and keep IDE project files in sync with a module graph.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Regenerate every project file and the solution file.",
    )
    _add_common_options(sync_parser)

    incremental_parser = subparsers.add_parser(
        "sync-if-needed",
        help="Regenerate only the project files affected by changed paths.",
    )
    _add_common_options(incremental_parser)
    incremental_parser.add_argument(
        "--changed",
        nargs="*",
        default=[],
        help="Paths that were added or modified.",
    )
    incremental_parser.add_argument(
        "--deleted",
        nargs="*",
        default=[],
        help="Paths that were removed.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for projsync commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(Path(args.path))
        graph_file = Path(args.graph) if args.graph else config.graph_file
        graph = load_graph(graph_file, config.root)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, GraphError) as exc:
        parser.exit(1, f"projsync {args.command} failed: {exc}\n")

    synchronizer = Synchronizer.from_config(graph, config)
    if args.generate_all is not None:
        synchronizer.generate_all(bool(args.generate_all))

    writes_before = synchronizer.writer.write_count
    try:
        if args.command == "sync":
            synchronizer.sync()
            updated = True
        elif args.command == "sync-if-needed":
            updated = synchronizer.sync_if_needed(args.changed, args.deleted)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except WriteFailure as exc:
        parser.exit(1, f"projsync {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    written = synchronizer.writer.write_count - writes_before
    if not updated:
        print("Project files already up to date")
    else:
        target = _relativize(synchronizer.project_directory)
        print(f"{written} project file(s) written in {target}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
