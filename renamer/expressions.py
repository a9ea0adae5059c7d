"""
expressions.py - Value Expressions

Expressions produce an optional string. None means "no value for the current
file" (a missing extension, a marker that was not found, a false condition
without an else branch) and is not an error: operations that receive None
simply leave the destination alone. Hard failures, such as an undefined
variable, raise EvaluationError subclasses instead.

Each node is a frozen dataclass; evaluate() is the single interpreter.
AssignVariable is the only node that writes to the engine state.
"""

from dataclasses import dataclass, field
from typing import Optional, Pattern, Union

from .models_fs import (
    Selection, CaseStyle, file_name_of, file_extension_of, file_stem_of,
)
from .engine_state import EngineState
from .errors import VariableNotDefinedError, CannotIdentifyFileNameError
from .match_rules import MatchRule, resolve
from .text_match import (
    compile_pattern, replace_text, regex_replace, left_of, right_of,
    insert_at, insert_before, insert_after, convert_case,
)


# ---------- Leaves ----------

@dataclass(frozen=True)
class Constant:
    value: str


@dataclass(frozen=True)
class FileName:
    """Name of the current file's destination (stem plus extension)"""


@dataclass(frozen=True)
class FileStem:
    """Name of the current file's destination without its extension"""


@dataclass(frozen=True)
class FileExtension:
    """Extension of the current file's destination, without the dot"""


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class LocalIndex:
    """Per-directory counter, zero padded to `padding` digits"""
    padding: int = 0
    start: int = 0


@dataclass(frozen=True)
class GlobalIndex:
    """Run-wide counter, zero padded to `padding` digits"""
    padding: int = 0
    start: int = 0


# ---------- Insert positions ----------

@dataclass(frozen=True)
class AtIndex:
    index: int
    clamp: bool = True


@dataclass(frozen=True)
class Before:
    marker: str


@dataclass(frozen=True)
class After:
    marker: str


@dataclass(frozen=True)
class BeforeMatch:
    pattern: str
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))


@dataclass(frozen=True)
class AfterMatch:
    pattern: str
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))


@dataclass(frozen=True)
class AtStart:
    pass


@dataclass(frozen=True)
class AtEnd:
    pass


Position = Union[AtIndex, Before, After, BeforeMatch, AfterMatch, AtStart, AtEnd]


# ---------- Internal nodes ----------

@dataclass(frozen=True)
class AssignVariable:
    name: str
    value: "Expression"


@dataclass(frozen=True)
class Combine:
    lhs: "Expression"
    rhs: "Expression"


@dataclass(frozen=True)
class ToUpper:
    input: "Expression"


@dataclass(frozen=True)
class ToLower:
    input: "Expression"


@dataclass(frozen=True)
class ConvertCase:
    style: CaseStyle
    input: "Expression"


@dataclass(frozen=True)
class Left:
    input: "Expression"
    marker: "Expression"
    inclusive: bool = False


@dataclass(frozen=True)
class Right:
    input: "Expression"
    marker: "Expression"
    inclusive: bool = False


@dataclass(frozen=True)
class Replace:
    content: "Expression"
    selection: Selection
    match: "Expression"
    replacement: "Expression"


@dataclass(frozen=True)
class RegexReplace:
    content: "Expression"
    selection: Selection
    pattern: str
    replacement: "Expression"
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))


@dataclass(frozen=True)
class RegexExtract:
    """First match of a pattern in the input"""
    pattern: str
    input: "Expression"
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))


@dataclass(frozen=True)
class Insert:
    position: Position
    base: "Expression"
    text: "Expression"


@dataclass(frozen=True)
class If:
    """Branch on a match rule tested against the current file's name"""
    condition: MatchRule
    then: "Expression"
    otherwise: Optional["Expression"] = None


Expression = Union[
    Constant, FileName, FileStem, FileExtension, Variable, LocalIndex, GlobalIndex,
    AssignVariable, Combine, ToUpper, ToLower, ConvertCase, Left, Right, Replace,
    RegexReplace, RegexExtract, Insert, If,
]


def _format_index(value: int, padding: int) -> str:
    text = str(value)
    if padding > 0:
        text = text.zfill(padding)
    return text


def _insert(position: Position, base: str, text: str) -> Optional[str]:
    if isinstance(position, AtIndex):
        return insert_at(base, position.index, text, clamp=position.clamp)
    elif isinstance(position, Before):
        return insert_before(base, position.marker, text)
    elif isinstance(position, After):
        return insert_after(base, position.marker, text)
    elif isinstance(position, BeforeMatch):
        m = position.regex.search(base)
        if m is None:
            return None
        return base[:m.start()] + text + base[m.start():]
    elif isinstance(position, AfterMatch):
        m = position.regex.search(base)
        if m is None:
            return None
        return base[:m.end()] + text + base[m.end():]
    elif isinstance(position, AtStart):
        return text + base
    elif isinstance(position, AtEnd):
        return base + text
    else:
        raise TypeError(f"Unknown insert position: {position!r}")


def evaluate(expr: Expression, state: EngineState) -> Optional[str]:
    """
    Evaluate an expression against the engine state

    Args:
        expr: Expression tree
        state: Engine state (variables, indices, current file)

    Returns:
        The produced string, or None when the expression has no value
    """
    if isinstance(expr, Constant):
        return expr.value

    elif isinstance(expr, FileName):
        return file_name_of(state.require_current_file().destination)

    elif isinstance(expr, FileStem):
        return file_stem_of(state.require_current_file().destination)

    elif isinstance(expr, FileExtension):
        return file_extension_of(state.require_current_file().destination)

    elif isinstance(expr, Variable):
        value = state.get_variable(expr.name)
        if value is None:
            raise VariableNotDefinedError(expr.name)
        return value

    elif isinstance(expr, LocalIndex):
        return _format_index(state.local_index + expr.start, expr.padding)

    elif isinstance(expr, GlobalIndex):
        return _format_index(state.global_index + expr.start, expr.padding)

    elif isinstance(expr, AssignVariable):
        value = evaluate(expr.value, state)
        if value is not None:
            state.set_variable(expr.name, value)
        return value

    elif isinstance(expr, Combine):
        lhs = evaluate(expr.lhs, state)
        if lhs is None:
            return evaluate(expr.rhs, state)
        rhs = evaluate(expr.rhs, state)
        if rhs is None:
            return lhs
        return lhs + rhs

    elif isinstance(expr, ToUpper):
        value = evaluate(expr.input, state)
        return None if value is None else value.upper()

    elif isinstance(expr, ToLower):
        value = evaluate(expr.input, state)
        return None if value is None else value.lower()

    elif isinstance(expr, ConvertCase):
        value = evaluate(expr.input, state)
        return None if value is None else convert_case(value, expr.style)

    elif isinstance(expr, (Left, Right)):
        value = evaluate(expr.input, state)
        if value is None:
            return None
        marker = evaluate(expr.marker, state)
        if marker is None:
            return None
        if isinstance(expr, Left):
            return left_of(value, marker, expr.inclusive)
        return right_of(value, marker, expr.inclusive)

    elif isinstance(expr, Replace):
        content = evaluate(expr.content, state)
        match = evaluate(expr.match, state)
        replacement = evaluate(expr.replacement, state)
        if content is None or match is None or replacement is None:
            return None
        return replace_text(content, match, replacement, expr.selection)

    elif isinstance(expr, RegexReplace):
        content = evaluate(expr.content, state)
        replacement = evaluate(expr.replacement, state)
        if content is None or replacement is None:
            return None
        return regex_replace(content, expr.regex, replacement, expr.selection)

    elif isinstance(expr, RegexExtract):
        value = evaluate(expr.input, state)
        if value is None:
            return None
        m = expr.regex.search(value)
        return None if m is None else m.group(0)

    elif isinstance(expr, Insert):
        base = evaluate(expr.base, state)
        text = evaluate(expr.text, state)
        if base is None or text is None:
            return None
        return _insert(expr.position, base, text)

    elif isinstance(expr, If):
        current = state.require_current_file().destination
        name = file_name_of(current)
        if name is None:
            raise CannotIdentifyFileNameError(current)
        if resolve(expr.condition, name):
            return evaluate(expr.then, state)
        elif expr.otherwise is not None:
            return evaluate(expr.otherwise, state)
        return None

    else:
        raise TypeError(f"Unknown expression: {expr!r}")
