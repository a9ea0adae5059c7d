"""
cli - Command Line Interface for the Rule-Based Batch Rename Tool
"""

from .cli_entry import main

__all__ = ["main"]
