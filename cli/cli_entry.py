"""
cli_entry.py - CLI Entry Point

Subcommands:
- preview: dry run a rule script and show the computed renames
- apply: preview, confirm, then rename on disk
- check: validate a rule script without touching any file
"""

import argparse
import sys
from pathlib import Path
from typing import List

from renamer import RenameResult, RenameToolError, Script, check_results, load_script
from renamer.script_loader import attach_directories
from renamer.logger_helper import configure_logging, get_logger

logger = get_logger(__name__)

PREVIEW_LIMIT = 20


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="rename_tool",
        description="Rule-Based Batch Rename Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show what a script would do
  rename_tool preview rules.json

  # Apply a script's rules to another folder as well
  rename_tool preview rules.json --dir ./photos --recursive

  # Rename without confirmation
  rename_tool apply rules.json --yes
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log evaluation details")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    for name, help_text in (("preview", "Dry run a rule script"), ("apply", "Rename files with a rule script")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("script", type=str, help="JSON rule script")
        sub.add_argument("--dir", "-d", dest="dirs", action="append", default=[],
                         help="Extra directory to process with the script's default rules (repeatable)")
        sub.add_argument("--recursive", "-r", action="store_true", help="Walk extra directories recursively")
        if name == "apply":
            sub.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    check_parser = subparsers.add_parser("check", help="Validate a rule script")
    check_parser.add_argument("script", type=str, help="JSON rule script")

    return parser


def build_script(args) -> Script:
    """Load the script, add --dir directories and build every tree"""
    builders = attach_directories(load_script(Path(args.script)), args.dirs, args.recursive)
    return Script(b.build_tree() for b in builders)


def print_preview(results: List[RenameResult]) -> int:
    """Print the changed renames; returns how many there are"""
    changed = [r for r in results if not r.is_same]
    if not changed:
        print("No files need renaming")
        return 0

    print(f"Will perform {len(changed)} rename operations ({len(results)} files processed):")
    print("-" * 80)
    for r in changed[:PREVIEW_LIMIT]:
        note = " (case only)" if r.is_case_only_change else ""
        print(f"  {r.source.name:<40} -> {r.destination.name}{note}")
    if len(changed) > PREVIEW_LIMIT:
        print(f"  ... and {len(changed) - PREVIEW_LIMIT} more operations")
    print("-" * 80)

    warnings = check_results(results)
    if warnings:
        print("Warnings:")
        for warn in warnings:
            print(f"  - {warn}")

    return len(changed)


def cmd_check(args) -> int:
    """Handle check command"""
    builders = load_script(Path(args.script))
    dirs = sum(len(b.directories) for b in builders)
    files = sum(len(b.files) for b in builders)
    print(f"Script OK: {len(builders)} trees, {dirs} directories, {files} files")
    return 0


def cmd_preview(args) -> int:
    """Handle preview command"""
    results = build_script(args).dry_run()
    print_preview(results)
    print("\n[Preview mode] Will not actually execute")
    return 0


def cmd_apply(args) -> int:
    """Handle apply command"""
    # Trees are single-use: one set for the preview, a fresh one for the run
    preview = build_script(args).dry_run()
    if print_preview(preview) == 0:
        return 0

    if not args.yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    print("\nExecuting...")
    results = build_script(args).run()
    renamed = sum(1 for r in results if not r.is_same)
    print(f"Execution Result:\n  - Renamed: {renamed}\n  - Unchanged: {len(results) - renamed}")
    return 0


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    handlers = {
        "preview": cmd_preview,
        "apply": cmd_apply,
        "check": cmd_check,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except RenameToolError as e:
        logger.error("[CLI] %s", e)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
