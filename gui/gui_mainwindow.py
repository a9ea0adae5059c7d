"""
gui_mainwindow.py - GUI Main Window

Pick a JSON rule script, optionally add a directory to run it on, preview the
computed renames and execute them.
"""

from pathlib import Path
from typing import Optional, List, Tuple

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QTableWidget,
    QTableWidgetItem, QProgressBar, QFileDialog, QMessageBox,
    QHeaderView, QGroupBox
)
from PySide6.QtCore import Slot
from PySide6.QtGui import QColor

from renamer import RenameResult
from .gui_workers import PreviewWorker, RenameWorker

COLUMNS = [
    ("Original Name", QHeaderView.ResizeMode.Stretch),
    ("New Name", QHeaderView.ResizeMode.Stretch),
    ("Status", QHeaderView.ResizeMode.ResizeToContents),
    ("Folder", QHeaderView.ResizeMode.Stretch),
]


def status_of(result: RenameResult) -> Tuple[str, QColor]:
    """Status column text and color for a computed rename"""
    if result.is_same:
        return "No Change", QColor(150, 150, 150)
    if result.is_case_only_change:
        return "Case Only", QColor(200, 150, 0)
    if result.source.parent != result.destination.parent:
        return "Will Move", QColor(0, 100, 200)
    return "Will Rename", QColor(0, 150, 0)


class ScriptPanel(QWidget):
    """Rule script preview and execution panel"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.results: List[RenameResult] = []
        self.preview_worker: Optional[PreviewWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Script settings group
        script_group = QGroupBox("Rule Script")
        script_layout = QGridLayout(script_group)

        script_layout.addWidget(QLabel("Script:"), 0, 0)
        self.script_edit = QLineEdit()
        self.script_edit.setPlaceholderText("Select a JSON rule script...")
        script_layout.addWidget(self.script_edit, 0, 1)
        self.script_btn = QPushButton("Browse...")
        self.script_btn.clicked.connect(self._browse_script)
        script_layout.addWidget(self.script_btn, 0, 2)

        script_layout.addWidget(QLabel("Extra Directory:"), 1, 0)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Optional, processed with the script's default rules")
        script_layout.addWidget(self.dir_edit, 1, 1)
        self.dir_btn = QPushButton("Browse...")
        self.dir_btn.clicked.connect(self._browse_directory)
        script_layout.addWidget(self.dir_btn, 1, 2)

        options_layout = QHBoxLayout()
        self.recursive_check = QCheckBox("Recursive")
        options_layout.addWidget(self.recursive_check)
        options_layout.addStretch()
        script_layout.addLayout(options_layout, 2, 0, 1, 3)

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        script_layout.addWidget(self.preview_btn, 3, 0, 1, 3)

        layout.addWidget(script_group)

        # Results table
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels([title for title, _ in COLUMNS])
        header = self.table.horizontalHeader()
        for col, (_, mode) in enumerate(COLUMNS):
            header.setSectionResizeMode(col, mode)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _browse_script(self):
        path, _ = QFileDialog.getOpenFileName(self, "Select Rule Script", "", "Rule Scripts (*.json);;All Files (*)")
        if path:
            self.script_edit.setText(path)

    def _browse_directory(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            self.dir_edit.setText(directory)

    def _inputs(self):
        """Validated (script, extra dirs), or None after warning the user"""
        script = self.script_edit.text().strip()
        if not script:
            QMessageBox.warning(self, "Warning", "Please select a rule script first")
            return None
        if not Path(script).is_file():
            QMessageBox.warning(self, "Warning", f"Script does not exist: {script}")
            return None

        directory = self.dir_edit.text().strip()
        if directory and not Path(directory).is_dir():
            QMessageBox.warning(self, "Warning", f"Directory does not exist: {directory}")
            return None

        return Path(script), [Path(directory)] if directory else []

    def _set_busy(self, busy: bool):
        self.preview_btn.setEnabled(not busy)
        self.script_btn.setEnabled(not busy)
        self.dir_btn.setEnabled(not busy)
        self.progress_bar.setVisible(busy)

    def _do_preview(self):
        """Dry run the script in the background"""
        inputs = self._inputs()
        if inputs is None:
            return
        script, dirs = inputs

        self._set_busy(True)
        self.execute_btn.setEnabled(False)
        self.preview_btn.setText("Generating...")
        self.progress_bar.setRange(0, 0)  # Indeterminate progress

        self.preview_worker = PreviewWorker(script, dirs, self.recursive_check.isChecked())
        self.preview_worker.finished.connect(self._on_preview_finished)
        self.preview_worker.error.connect(self._on_preview_error)
        self.preview_worker.start()

    @Slot(list, list)
    def _on_preview_finished(self, results: List[RenameResult], warnings: List[str]):
        self.results = results
        self._set_busy(False)
        self.preview_btn.setText("Preview")

        self._update_table()

        changed = sum(1 for r in results if not r.is_same)
        if warnings:
            QMessageBox.warning(self, "Warning", "\n".join(warnings))

        if changed:
            self.execute_btn.setEnabled(True)
            self.status_label.setText(f"Will perform {changed} rename operations ({len(results)} files processed)")
        else:
            self.status_label.setText("No files need renaming")

    @Slot(str)
    def _on_preview_error(self, error: str):
        self._set_busy(False)
        self.preview_btn.setText("Preview")
        QMessageBox.critical(self, "Error", f"Failed to generate preview: {error}")

    def _update_table(self):
        self.table.setRowCount(len(self.results))

        for i, r in enumerate(self.results):
            self.table.setItem(i, 0, QTableWidgetItem(r.source.name))
            self.table.setItem(i, 1, QTableWidgetItem(r.destination.name))
            text, color = status_of(r)
            status_item = QTableWidgetItem(text)
            status_item.setForeground(color)
            self.table.setItem(i, 2, status_item)
            self.table.setItem(i, 3, QTableWidgetItem(str(r.destination.parent)))

    def _do_execute(self):
        """Execute rename"""
        changed = sum(1 for r in self.results if not r.is_same)
        if not changed:
            return

        inputs = self._inputs()
        if inputs is None:
            return
        script, dirs = inputs

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to execute {changed} rename operations?\n\nThis action cannot be undone!",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self._set_busy(True)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setText("Executing...")
        self.progress_bar.setRange(0, len(self.results))

        # The preview's trees are spent; the worker rebuilds from the script
        self.rename_worker = RenameWorker(script, dirs, self.recursive_check.isChecked())
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.finished.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.start()

    @Slot(int, int, str)
    def _on_rename_progress(self, current: int, total: int, msg: str):
        self.progress_bar.setMaximum(total)
        self.progress_bar.setValue(current)
        self.status_label.setText(msg[-80:] if len(msg) > 80 else msg)

    @Slot(list)
    def _on_rename_finished(self, results: List[RenameResult]):
        self._set_busy(False)
        self.execute_btn.setText("Execute Rename")

        renamed = sum(1 for r in results if not r.is_same)
        QMessageBox.information(
            self, "Complete",
            f"Rename complete!\n\nRenamed: {renamed}\nUnchanged: {len(results) - renamed}"
        )

        self.results = []
        self.table.setRowCount(0)
        self.status_label.setText("Complete")

    @Slot(str)
    def _on_rename_error(self, error: str):
        self._set_busy(False)
        self.execute_btn.setText("Execute Rename")
        self.execute_btn.setEnabled(False)
        self.results = []
        QMessageBox.critical(self, "Error", f"Execution failed: {error}\n\nPreview again before retrying.")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, script_path: Optional[Path] = None):
        super().__init__()
        self.setWindowTitle("Rule-Based Rename Tool")
        self.setMinimumSize(800, 600)

        self.panel = ScriptPanel()
        if script_path is not None:
            self.panel.script_edit.setText(str(script_path))
        self.setCentralWidget(self.panel)

        self.statusBar().showMessage("Ready")
