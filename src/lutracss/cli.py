# lutracss.cli - Command line interface
"""
CLI entry point for lutracss.
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

from lutracss.version import __version__
from lutracss.config import load_config
from lutracss.log import configure_logging
from lutracss.workspace import IndexWatcher, Workspace


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="lutracss",
        description="CSS variable completion for lutra projects",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"lutracss {__version__}",
    )

    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable diagnostic logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    scan_parser = subparsers.add_parser(
        "scan",
        help="Index the project and list its CSS variables",
    )
    scan_parser.add_argument(
        "-o", "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    complete_parser = subparsers.add_parser(
        "complete",
        help="Show completions for a position in a file",
    )
    complete_parser.add_argument(
        "file",
        type=Path,
        help="Document to complete in",
    )
    complete_parser.add_argument(
        "line",
        type=int,
        help="Line number (1-based)",
    )
    complete_parser.add_argument(
        "column",
        type=int,
        help="Column (0-based, characters before the cursor)",
    )
    complete_parser.add_argument(
        "-o", "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    subparsers.add_parser(
        "watch",
        help="Keep the index up to date while files change",
    )

    subparsers.add_parser(
        "repl",
        help="Interactive completion prompt (default)",
    )

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    root = args.root.expanduser()
    config = load_config(args.config, project_root=root)
    configure_logging(config.enable_logging or args.debug)

    workspace = Workspace(root, config)

    if args.command == "scan":
        return run_scan(workspace, args.output)

    if args.command == "complete":
        return run_complete(workspace, args.file, args.line, args.column, args.output)

    if args.command == "watch":
        return run_watch(workspace)

    return run_repl(workspace, config.history_file)


def _activate(workspace: Workspace) -> bool:
    """Activate the workspace, reporting why it stayed inactive."""
    if asyncio.run(workspace.activate()):
        return True
    print(
        f"No package.json under {workspace.root} depends on {workspace.library}; "
        "nothing to index",
        file=sys.stderr,
    )
    return False


def run_scan(workspace: Workspace, output_format: str) -> int:
    """Index the project and print the variables."""
    if not _activate(workspace):
        return 1

    variables = sorted(workspace.variables.values(), key=lambda v: v.name)

    if output_format == "json":
        print(json.dumps({
            "count": len(variables),
            "items": [v.to_dict() for v in variables],
        }, indent=2))
        return 0

    if not variables:
        print("No variables found.")
        return 0

    for variable in variables:
        print(variable.format_text())
    print(f"\n({len(variables)} variable{'s' if len(variables) != 1 else ''})")
    return 0


def run_complete(
    workspace: Workspace,
    file: Path,
    line: int,
    column: int,
    output_format: str,
) -> int:
    """Print completions for a file position."""
    try:
        text = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read {file}: {e}", file=sys.stderr)
        return 1

    if line < 1:
        print("Error: Line numbers start at 1", file=sys.stderr)
        return 1

    if not _activate(workspace):
        return 1

    candidates = workspace.provide_completions(text, line - 1, column)

    if output_format == "json":
        print(json.dumps({
            "count": len(candidates),
            "items": [c.to_dict() for c in candidates],
        }, indent=2))
        return 0

    if not candidates:
        print("No completions.")
        return 0

    for candidate in candidates:
        print(candidate.format_text())
    return 0


def run_watch(workspace: Workspace) -> int:
    """Rebuild the index whenever watched files change."""
    if not _activate(workspace):
        return 1

    async def watch() -> None:
        print(f"Watching {workspace.root} ({len(workspace.variables)} variables). Ctrl+C to stop.")
        loop = asyncio.get_running_loop()
        with IndexWatcher(workspace, loop) as watcher:
            last = watcher.rebuilds
            while True:
                await asyncio.sleep(0.5)
                if watcher.rebuilds != last:
                    last = watcher.rebuilds
                    print(f"Rescanned: {len(workspace.variables)} variables")

    try:
        asyncio.run(watch())
    except KeyboardInterrupt:
        print("\nStopped.")
    return 0


def run_repl(workspace: Workspace, history_file) -> int:
    """Run interactive REPL."""
    from lutracss.repl import Repl

    if not _activate(workspace):
        return 1

    repl = Repl(workspace, history_file=history_file)
    repl.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
