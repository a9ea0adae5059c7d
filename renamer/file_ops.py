"""
file_ops.py - File Operations

Operations that rewrite the destination path of the file currently being
processed. Each returns whether the destination changed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .models_fs import file_name_of, split_name, with_file_name
from .engine_state import EngineState
from .errors import CannotIdentifyFileNameError, CannotIdentifyFileExtensionError
from .expressions import Expression, evaluate
from .match_rules import MatchRule, resolve
from .logger_helper import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SetName:
    value: Expression


@dataclass(frozen=True)
class SetStem:
    """Replace the name but keep the current extension"""
    value: Expression


@dataclass(frozen=True)
class SetExtension:
    value: Expression


@dataclass(frozen=True)
class IfOp:
    """Branch on a match rule tested against the full destination path"""
    condition: MatchRule
    then: "FileOperation"
    otherwise: Optional["FileOperation"] = None


@dataclass(frozen=True)
class NoOp:
    """Evaluate an expression for its side effects only"""
    value: Expression


@dataclass(frozen=True)
class Sequence:
    operations: Tuple["FileOperation", ...]

    def __post_init__(self):
        object.__setattr__(self, "operations", tuple(self.operations))


FileOperation = Union[SetName, SetStem, SetExtension, IfOp, NoOp, Sequence]


def _text(value: str, path: Path) -> str:
    # Undecodable bytes survive in paths as lone surrogates
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CannotIdentifyFileExtensionError(path) from e
    return value


def _current_name(path: Path) -> str:
    name = file_name_of(path)
    if name is None:
        raise CannotIdentifyFileNameError(path)
    return name


def apply_file_operation(op: FileOperation, state: EngineState) -> bool:
    """
    Apply one file operation to the current file

    Args:
        op: Operation tree
        state: Engine state; state.current_file is the file being renamed

    Returns:
        Whether the destination path was changed
    """
    if isinstance(op, SetName):
        name = evaluate(op.value, state)
        if name is None:
            return False
        current = state.require_current_file()
        current.destination = with_file_name(current.destination, name)
        return True

    elif isinstance(op, SetStem):
        stem = evaluate(op.value, state)
        if stem is None:
            return False
        current = state.require_current_file()
        _, extension = split_name(_current_name(current.destination))
        if extension is not None:
            new_name = f"{stem}.{_text(extension, current.destination)}"
        else:
            new_name = stem
        current.destination = with_file_name(current.destination, new_name)
        return True

    elif isinstance(op, SetExtension):
        extension = evaluate(op.value, state)
        if extension is None:
            return False
        current = state.require_current_file()
        stem, _ = split_name(_current_name(current.destination))
        new_name = f"{stem}.{extension}" if extension else stem
        current.destination = with_file_name(current.destination, new_name)
        return True

    elif isinstance(op, IfOp):
        target = state.require_current_file().destination_path_string()
        if resolve(op.condition, target):
            return apply_file_operation(op.then, state)
        elif op.otherwise is not None:
            return apply_file_operation(op.otherwise, state)
        return False

    elif isinstance(op, NoOp):
        evaluate(op.value, state)
        return False

    elif isinstance(op, Sequence):
        changed = False
        for step in op.operations:
            changed = apply_file_operation(step, state) or changed
        return changed

    else:
        raise TypeError(f"Unknown file operation: {op!r}")


def apply_file_operations(operations, state: EngineState) -> bool:
    """Apply operations in order; every one runs even after a no-op"""
    changed = False
    for op in operations:
        changed = apply_file_operation(op, state) or changed
    if changed:
        logger.debug("[FileOps] %s -> %s", state.current_file.source, state.current_file.destination)
    return changed
