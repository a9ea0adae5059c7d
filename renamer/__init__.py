"""
renamer - Rule-Based Batch Rename Engine

Computes destination paths by evaluating match rules, expressions and
file/directory operations over batches of files, then performs or
simulates the renames.
"""

from .errors import (
    RenameToolError,
    StructuralError,
    NotDirectoryError,
    NotFileError,
    DuplicateFileError,
    FilesystemError,
    ReadDirError,
    CanonicalizeError,
    RenameIOError,
    MaxDepthReachedError,
    EvaluationError,
    VariableNotDefinedError,
    CannotIdentifyFileNameError,
    CannotIdentifyFileExtensionError,
    InsertIndexTooLargeError,
    NoCurrentFileError,
    ReservedVariableError,
    InvalidPatternError,
    ScriptFormatError,
)

from .models_fs import (
    FileItem,
    DirItem,
    RenameResult,
    WalkOptions,
    Selection,
    SortDirection,
    DirInclusion,
    CaseStyle,
)

from .engine_state import EngineState
from .match_rules import resolve
from .expressions import evaluate
from .file_ops import apply_file_operation
from .dir_ops import apply_dir_operation
from .operation_engine import OperationEngine

from .scan_files import (
    walk,
    list_directory,
)

from .exec_rename import (
    execute_rename,
    rename_file,
    dry_rename_file,
)

from .rename_tree import (
    Builder,
    RenameTree,
)

from .script import Script

from .script_loader import (
    load_script,
    builder_from_dict,
    builders_from_dict,
)

from .safety_checks import check_results

__all__ = [
    # Errors
    "RenameToolError",
    "StructuralError",
    "NotDirectoryError",
    "NotFileError",
    "DuplicateFileError",
    "FilesystemError",
    "ReadDirError",
    "CanonicalizeError",
    "RenameIOError",
    "MaxDepthReachedError",
    "EvaluationError",
    "VariableNotDefinedError",
    "CannotIdentifyFileNameError",
    "CannotIdentifyFileExtensionError",
    "InsertIndexTooLargeError",
    "NoCurrentFileError",
    "ReservedVariableError",
    "InvalidPatternError",
    "ScriptFormatError",

    # Data models
    "FileItem",
    "DirItem",
    "RenameResult",
    "WalkOptions",
    "Selection",
    "SortDirection",
    "DirInclusion",
    "CaseStyle",

    # Evaluation
    "EngineState",
    "resolve",
    "evaluate",
    "apply_file_operation",
    "apply_dir_operation",
    "OperationEngine",

    # Filesystem collaborators
    "walk",
    "list_directory",
    "execute_rename",
    "rename_file",
    "dry_rename_file",

    # Driver
    "Builder",
    "RenameTree",
    "Script",

    # Scripts
    "load_script",
    "builder_from_dict",
    "builders_from_dict",

    # Safety checks
    "check_results",
]
