"""
errors.py - Error Taxonomy

Every failure aborts the whole run, so callers only need to catch
RenameToolError. The subclasses tell where the run stopped:
- StructuralError: bad inputs to the tree builder or the commit step
- FilesystemError: an OS call failed (the OSError is kept as os_error)
- EvaluationError: an expression or operation could not be evaluated
"""

from typing import Optional


class RenameToolError(Exception):
    """Base error for the project."""


class StructuralError(RenameToolError):
    pass


class NotDirectoryError(StructuralError):
    def __init__(self, path):
        super().__init__(f"Not a directory: {path}")
        self.path = path


class NotFileError(StructuralError):
    def __init__(self, path):
        super().__init__(f"Not a file: {path}")
        self.path = path


class DuplicateFileError(StructuralError):
    def __init__(self, path):
        super().__init__(f"File is claimed by more than one rename: {path}")
        self.path = path


class FilesystemError(RenameToolError):
    """Wraps the OSError raised by a filesystem call."""

    def __init__(self, message: str, os_error: Optional[OSError] = None):
        if os_error is not None:
            message = f"{message}: {os_error}"
        super().__init__(message)
        self.os_error = os_error


class ReadDirError(FilesystemError):
    pass


class CanonicalizeError(FilesystemError):
    pass


class RenameIOError(FilesystemError):
    def __init__(self, source, destination, os_error: OSError):
        super().__init__(f"Cannot rename {source} -> {destination}", os_error)
        self.source = source
        self.destination = destination


class MaxDepthReachedError(RenameToolError):
    def __init__(self, path, max_depth: int):
        super().__init__(f"Maximum depth {max_depth} reached at {path}")
        self.path = path
        self.max_depth = max_depth


class EvaluationError(RenameToolError):
    pass


class VariableNotDefinedError(EvaluationError):
    def __init__(self, name: str):
        super().__init__(f"Variable is not defined: {name}")
        self.name = name


class CannotIdentifyFileNameError(EvaluationError):
    def __init__(self, path=None):
        super().__init__(f"Cannot identify file name of: {path}")
        self.path = path


class CannotIdentifyFileExtensionError(EvaluationError):
    def __init__(self, path=None):
        super().__init__(f"Cannot identify file extension of: {path}")
        self.path = path


class InsertIndexTooLargeError(EvaluationError):
    def __init__(self, index: int, length: int):
        super().__init__(f"Insert index {index} exceeds text length {length}")
        self.index = index
        self.length = length


class NoCurrentFileError(EvaluationError):
    def __init__(self):
        super().__init__("Expression needs a current file but none is being processed")


class ReservedVariableError(EvaluationError):
    def __init__(self, name: str):
        super().__init__(f"Variable is reserved and cannot be assigned: {name}")
        self.name = name


class InvalidPatternError(RenameToolError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
        self.pattern = pattern


class ScriptFormatError(RenameToolError):
    pass
