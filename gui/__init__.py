"""
gui - PySide6 front end: preview and apply JSON rule scripts
"""

from .gui_entry import main

__all__ = ["main"]
