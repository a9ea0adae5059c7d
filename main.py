#!/usr/bin/env python3
"""
Rule-Based Batch Rename Tool - Main Entry

The GUI starts by default. --cli/-c, or a subcommand as first argument,
switches to the command line.

Usage:
    python main.py                          # GUI
    python main.py rules.json               # GUI with a script preloaded
    python main.py preview rules.json       # Dry run a rule script
    python main.py -c apply rules.json -y   # Rename with a rule script
"""

import sys
from pathlib import Path

# Ensure the current directory is in the Python path
sys.path.insert(0, str(Path(__file__).parent))

CLI_FLAGS = ("--cli", "-c")
CLI_COMMANDS = ("preview", "apply", "check")


def main(argv=None):
    """Main entry point"""
    argv = list(sys.argv[1:] if argv is None else argv)

    cli_requested = any(a in CLI_FLAGS for a in argv)
    if cli_requested or (argv and argv[0] in CLI_COMMANDS):
        from cli import main as cli_main
        return cli_main([a for a in argv if a not in CLI_FLAGS])

    try:
        from gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI ({e})")
        print("Install PySide6 (pip install PySide6), or use the command line:")
        print("    python main.py preview rules.json")
        return 1
    return gui_main(argv)


if __name__ == "__main__":
    sys.exit(main())
