"""
gui_workers.py - GUI Worker Threads

Runs script loading, tree building and renaming in the background to avoid
blocking the UI. Each worker builds its own trees, since a tree can only be
committed once.
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtCore import QThread, Signal, QObject

from renamer import RenameToolError, Script, check_results, load_script
from renamer.script_loader import attach_directories
from renamer.logger_helper import get_logger

logger = get_logger(__name__)


def build_script(script_path: Path, extra_dirs: List[Path], recursive: bool) -> Script:
    builders = attach_directories(load_script(script_path), extra_dirs, recursive)
    return Script(b.build_tree() for b in builders)


class PreviewWorker(QThread):
    """Dry run worker thread"""

    # Signals
    finished = Signal(list, list)       # results, warnings
    error = Signal(str)                 # Error message

    def __init__(
        self,
        script_path: Path,
        extra_dirs: Optional[List[Path]] = None,
        recursive: bool = False,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.script_path = script_path
        self.extra_dirs = extra_dirs or []
        self.recursive = recursive

    def run(self):
        try:
            results = build_script(self.script_path, self.extra_dirs, self.recursive).dry_run()
            self.finished.emit(results, check_results(results))
        except RenameToolError as e:
            logger.error("[PreviewWorker] %s", e)
            self.error.emit(str(e))
        except Exception as e:
            logger.exception("[PreviewWorker] Unexpected error")
            self.error.emit(str(e))


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(list)             # results
    error = Signal(str)                 # Error message

    def __init__(
        self,
        script_path: Path,
        extra_dirs: Optional[List[Path]] = None,
        recursive: bool = False,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.script_path = script_path
        self.extra_dirs = extra_dirs or []
        self.recursive = recursive

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            script = build_script(self.script_path, self.extra_dirs, self.recursive)
            self.finished.emit(script.run(progress_callback))
        except RenameToolError as e:
            logger.error("[RenameWorker] %s", e)
            self.error.emit(str(e))
        except Exception as e:
            logger.exception("[RenameWorker] Unexpected error")
            self.error.emit(str(e))
