"""
engine_state.py - Mutable State of One Rename Run

The state is passed explicitly to every expression, file operation and
directory operation. It lives exactly as long as one OperationEngine.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .models_fs import FileItem
from .errors import NoCurrentFileError, ReservedVariableError

GLOBAL_INDEX_VAR = "global_index"
LOCAL_INDEX_VAR = "local_index"
RESERVED_VARIABLES = (GLOBAL_INDEX_VAR, LOCAL_INDEX_VAR)


@dataclass
class EngineState:
    global_index: int = 0                   # Files completed in the whole run
    local_index: int = 0                    # Files completed in the current directory
    variables: Dict[str, str] = field(default_factory=dict)
    current_file: Optional[FileItem] = None

    def get_variable(self, name: str) -> Optional[str]:
        """Look up a variable; the index counters are always defined"""
        if name == GLOBAL_INDEX_VAR:
            return str(self.global_index)
        if name == LOCAL_INDEX_VAR:
            return str(self.local_index)
        return self.variables.get(name)

    def set_variable(self, name: str, value: str) -> None:
        if name in RESERVED_VARIABLES:
            raise ReservedVariableError(name)
        self.variables[name] = value

    def require_current_file(self) -> FileItem:
        if self.current_file is None:
            raise NoCurrentFileError()
        return self.current_file
