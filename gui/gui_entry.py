"""
gui_entry.py - GUI Entry

Starts the PySide6 window. An optional script path on the command line is
loaded into the script field.
"""

import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from renamer.logger_helper import configure_logging, get_logger
from .gui_mainwindow import MainWindow

logger = get_logger(__name__)

APP_NAME = "Rule-Based Rename Tool"


def main(argv: Optional[List[str]] = None):
    """GUI main entry"""
    argv = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    app = QApplication([sys.argv[0]] + argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion("1.0.0")
    app.setStyle("Fusion")

    # First non-option argument is a rule script
    scripts = [a for a in app.arguments()[1:] if not a.startswith("-")]
    window = MainWindow(Path(scripts[0]) if scripts else None)
    window.show()

    logger.info("[GUI] %s started", APP_NAME)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
