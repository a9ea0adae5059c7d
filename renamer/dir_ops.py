"""
dir_ops.py - Directory Operations

Operations applied to the whole batch of files of one directory before any
file operation runs: sorting, filtering and resetting the local index.
"""

from dataclasses import dataclass
from typing import List, Union

from .models_fs import FileItem, SortDirection, file_name_of
from .engine_state import EngineState
from .errors import CannotIdentifyFileNameError
from .match_rules import MatchRule, resolve
from .sort_rules import sort_files


@dataclass(frozen=True)
class Sort:
    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class Remove:
    """Drop files whose destination name matches"""
    rule: MatchRule


@dataclass(frozen=True)
class IncludeOnly:
    """Keep only files whose destination name matches"""
    rule: MatchRule


@dataclass(frozen=True)
class OffsetLocalIndex:
    value: int


DirOperation = Union[Sort, Remove, IncludeOnly, OffsetLocalIndex]


def _filter(files: List[FileItem], rule: MatchRule, keep_matches: bool) -> List[FileItem]:
    kept = []
    for f in files:
        name = file_name_of(f.destination)
        if name is None:
            raise CannotIdentifyFileNameError(f.destination)
        if resolve(rule, name) == keep_matches:
            kept.append(f)
    return kept


def apply_dir_operation(op: DirOperation, state: EngineState, files: List[FileItem]) -> List[FileItem]:
    """
    Apply one directory operation to a batch

    Args:
        op: Operation
        state: Engine state (OffsetLocalIndex writes local_index)
        files: Current batch

    Returns:
        The batch to hand to the next operation
    """
    if isinstance(op, Sort):
        return sort_files(files, op.direction)
    elif isinstance(op, Remove):
        return _filter(files, op.rule, keep_matches=False)
    elif isinstance(op, IncludeOnly):
        return _filter(files, op.rule, keep_matches=True)
    elif isinstance(op, OffsetLocalIndex):
        state.local_index = op.value
        return files
    else:
        raise TypeError(f"Unknown directory operation: {op!r}")
