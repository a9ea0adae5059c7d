"""
script_loader.py - JSON Rule Scripts

Loads rename rules from JSON. A document describes one tree, or several
under a "trees" key:

    {
      "dir_operations":  [{"op": "sort", "direction": "ascending"}],
      "file_operations": [{"op": "set_stem", "value": {"type": "combine",
                           "parts": ["img_", {"type": "local_index", "padding": 3}]}}],
      "directories": [{"path": "photos", "recursive": false}],
      "files": ["notes.txt"]
    }

Expressions are strings (constants) or objects tagged with "type"; match
rules are objects tagged with "type"; operations are objects tagged with
"op". Relative paths are resolved against the script's directory.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import json

from .models_fs import (
    DirItem, FileItem, WalkOptions, Selection, SortDirection, CaseStyle,
)
from .errors import ScriptFormatError, FilesystemError
from .rename_tree import Builder
from .engine_state import RESERVED_VARIABLES
from . import match_rules as mr
from . import expressions as ex
from . import file_ops as fo
from . import dir_ops as do
from .logger_helper import get_logger

logger = get_logger(__name__)

MAX_NESTING = 64


def _check_depth(depth: int) -> None:
    if depth > MAX_NESTING:
        raise ScriptFormatError(f"Rules are nested deeper than {MAX_NESTING} levels")


def _require(data: Dict[str, Any], key: str, what: str) -> Any:
    if key not in data:
        raise ScriptFormatError(f"{what} is missing '{key}': {data!r}")
    return data[key]


def _expect(value: Any, kind, what: str) -> Any:
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ScriptFormatError(f"{what} must be {getattr(kind, '__name__', kind)}, got {value!r}")
    return value


def _tagged(data: Any, tag: str, what: str) -> str:
    _expect(data, dict, what)
    return str(_require(data, tag, what)).lower()


def _enum(enum_cls, value: Any, what: str):
    _expect(value, str, what)
    try:
        return enum_cls(value.lower())
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        raise ScriptFormatError(f"{what} must be one of {choices}, got {value!r}") from None


def _fold(items: List[Any], node, parse_item, depth: int):
    """
    Join a list with a binary node as a balanced tree, keeping item order

    Long "parts" or "rules" lists stay a logarithmic number of levels deep,
    and every level counts against MAX_NESTING.
    """
    _check_depth(depth)
    if len(items) == 1:
        return parse_item(items[0], depth)
    mid = (len(items) + 1) // 2
    return node(_fold(items[:mid], node, parse_item, depth + 1),
                _fold(items[mid:], node, parse_item, depth + 1))


# ---------- Match rules ----------

_LEAF_RULES = {
    "equals": mr.Equals,
    "contains": mr.Contains,
    "begins_with": mr.BeginsWith,
    "ends_with": mr.EndsWith,
}


def parse_match_rule(data: Any, depth: int = 0) -> mr.MatchRule:
    _check_depth(depth)
    kind = _tagged(data, "type", "Match rule")

    if kind in _LEAF_RULES:
        return _LEAF_RULES[kind](_expect(_require(data, "value", kind), str, f"{kind}.value"))
    if kind == "matches":
        return mr.Matches(_expect(_require(data, "pattern", kind), str, "matches.pattern"))
    if kind == "not":
        return mr.Not(parse_match_rule(_require(data, "rule", kind), depth + 1))
    if kind in ("and", "or"):
        rules = _expect(_require(data, "rules", kind), list, f"{kind}.rules")
        if len(rules) < 2:
            raise ScriptFormatError(f"'{kind}' needs at least two rules")
        node = mr.And if kind == "and" else mr.Or
        return _fold(rules, node, parse_match_rule, depth + 1)

    raise ScriptFormatError(f"Unknown match rule type: {kind!r}")


# ---------- Expressions ----------

def _parse_position(data: Any) -> ex.Position:
    if isinstance(data, str):
        data = {"at": data}
    kind = _tagged(data, "at", "Insert position")

    if kind == "index":
        index = _expect(_require(data, "index", "index position"), int, "position.index")
        return ex.AtIndex(index, clamp=bool(data.get("clamp", True)))
    if kind == "before":
        return ex.Before(_expect(_require(data, "marker", kind), str, "position.marker"))
    if kind == "after":
        return ex.After(_expect(_require(data, "marker", kind), str, "position.marker"))
    if kind == "before_match":
        return ex.BeforeMatch(_expect(_require(data, "pattern", kind), str, "position.pattern"))
    if kind == "after_match":
        return ex.AfterMatch(_expect(_require(data, "pattern", kind), str, "position.pattern"))
    if kind == "start":
        return ex.AtStart()
    if kind == "end":
        return ex.AtEnd()

    raise ScriptFormatError(f"Unknown insert position: {kind!r}")


def parse_expression(data: Any, depth: int = 0) -> ex.Expression:
    """
    Build an expression tree from its JSON form

    Args:
        data: A string (constant) or a dict tagged with "type"
        depth: Current nesting level

    Returns:
        Expression tree
    """
    _check_depth(depth)
    if isinstance(data, str):
        return ex.Constant(data)

    kind = _tagged(data, "type", "Expression")

    def sub(key: str) -> ex.Expression:
        return parse_expression(_require(data, key, kind), depth + 1)

    if kind == "constant":
        return ex.Constant(_expect(_require(data, "value", kind), str, "constant.value"))
    if kind == "file_name":
        return ex.FileName()
    if kind == "file_stem":
        return ex.FileStem()
    if kind == "file_extension":
        return ex.FileExtension()
    if kind == "variable":
        return ex.Variable(_expect(_require(data, "name", kind), str, "variable.name"))
    if kind in ("local_index", "global_index"):
        node = ex.LocalIndex if kind == "local_index" else ex.GlobalIndex
        return node(padding=_expect(data.get("padding", 0), int, f"{kind}.padding"),
                    start=_expect(data.get("start", 0), int, f"{kind}.start"))
    if kind == "assign":
        name = _expect(_require(data, "name", kind), str, "assign.name")
        if name in RESERVED_VARIABLES:
            raise ScriptFormatError(f"Cannot assign to reserved variable {name!r}")
        return ex.AssignVariable(name, sub("value"))
    if kind == "combine":
        if "parts" in data:
            parts = _expect(data["parts"], list, "combine.parts")
            if not parts:
                raise ScriptFormatError("'combine' needs at least one part")
            return _fold(parts, ex.Combine, parse_expression, depth + 1)
        return ex.Combine(sub("lhs"), sub("rhs"))
    if kind == "upper":
        return ex.ToUpper(sub("input"))
    if kind == "lower":
        return ex.ToLower(sub("input"))
    if kind == "convert_case":
        return ex.ConvertCase(_enum(CaseStyle, _require(data, "style", kind), "convert_case.style"), sub("input"))
    if kind in ("left", "right"):
        node = ex.Left if kind == "left" else ex.Right
        return node(sub("input"), sub("marker"), inclusive=bool(data.get("inclusive", False)))
    if kind == "replace":
        return ex.Replace(
            sub("content"),
            _enum(Selection, data.get("selection", "all"), "replace.selection"),
            sub("match"),
            sub("replacement"),
        )
    if kind == "regex_replace":
        return ex.RegexReplace(
            sub("content"),
            _enum(Selection, data.get("selection", "all"), "regex_replace.selection"),
            _expect(_require(data, "pattern", kind), str, "regex_replace.pattern"),
            sub("replacement"),
        )
    if kind == "regex_extract":
        return ex.RegexExtract(_expect(_require(data, "pattern", kind), str, "regex_extract.pattern"), sub("input"))
    if kind == "insert":
        return ex.Insert(_parse_position(_require(data, "position", kind)), sub("base"), sub("text"))
    if kind == "if":
        otherwise = data.get("else")
        return ex.If(
            parse_match_rule(_require(data, "condition", kind), depth + 1),
            sub("then"),
            None if otherwise is None else parse_expression(otherwise, depth + 1),
        )

    raise ScriptFormatError(f"Unknown expression type: {kind!r}")


# ---------- Operations ----------

def parse_file_operation(data: Any, depth: int = 0) -> fo.FileOperation:
    _check_depth(depth)
    kind = _tagged(data, "op", "File operation")

    if kind in ("set_name", "set_stem", "set_extension"):
        node = {"set_name": fo.SetName, "set_stem": fo.SetStem, "set_extension": fo.SetExtension}[kind]
        return node(parse_expression(_require(data, "value", kind), depth + 1))
    if kind == "no_op":
        return fo.NoOp(parse_expression(_require(data, "value", kind), depth + 1))
    if kind == "if":
        otherwise = data.get("else")
        return fo.IfOp(
            parse_match_rule(_require(data, "condition", kind), depth + 1),
            parse_file_operation(_require(data, "then", kind), depth + 1),
            None if otherwise is None else parse_file_operation(otherwise, depth + 1),
        )
    if kind == "sequence":
        ops = _expect(_require(data, "operations", kind), list, "sequence.operations")
        return fo.Sequence(tuple(parse_file_operation(item, depth + 1) for item in ops))

    raise ScriptFormatError(f"Unknown file operation: {kind!r}")


def parse_dir_operation(data: Any) -> do.DirOperation:
    kind = _tagged(data, "op", "Directory operation")

    if kind == "sort":
        return do.Sort(_enum(SortDirection, data.get("direction", "ascending"), "sort.direction"))
    if kind == "remove":
        return do.Remove(parse_match_rule(_require(data, "rule", kind), 1))
    if kind == "include_only":
        return do.IncludeOnly(parse_match_rule(_require(data, "rule", kind), 1))
    if kind == "offset_local_index":
        value = _expect(_require(data, "value", kind), int, "offset_local_index.value")
        if value < 0:
            raise ScriptFormatError("offset_local_index.value cannot be negative")
        return do.OffsetLocalIndex(value)

    raise ScriptFormatError(f"Unknown directory operation: {kind!r}")


def _operation_list(data: Dict[str, Any], key: str, parser) -> list:
    items = _expect(data.get(key, []), list, key)
    return [parser(item) for item in items]


# ---------- Trees ----------

def _resolve_path(value: Any, base_dir: Path, what: str) -> Path:
    path = Path(_expect(value, str, what)).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _parse_directory(data: Any, base_dir: Path) -> DirItem:
    if isinstance(data, str):
        data = {"path": data}
    _expect(data, dict, "Directory")

    max_depth = data.get("max_depth")
    if max_depth is not None:
        _expect(max_depth, int, "directory.max_depth")

    options = WalkOptions(
        max_depth=max_depth,
        fail_on_depth=bool(data.get("fail_on_depth", True)),
        canonicalize=bool(data.get("canonicalize", True)),
        ignore_dirs=[_expect(d, str, "directory.ignore_dirs") for d in data.get("ignore_dirs", [])],
    )
    return DirItem(
        path=_resolve_path(_require(data, "path", "Directory"), base_dir, "directory.path"),
        recursive=bool(data.get("recursive", False)),
        dir_operations=_operation_list(data, "dir_operations", parse_dir_operation),
        file_operations=_operation_list(data, "file_operations", parse_file_operation),
        walk_options=options,
    )


def _parse_file(data: Any, base_dir: Path) -> FileItem:
    if isinstance(data, str):
        data = {"path": data}
    _expect(data, dict, "File")
    return FileItem(
        source=_resolve_path(_require(data, "path", "File"), base_dir, "file.path"),
        operations=_operation_list(data, "file_operations", parse_file_operation),
    )


def builder_from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> Builder:
    """
    Build a tree builder from one tree document

    Args:
        data: Parsed JSON object
        base_dir: Directory for relative paths (current directory by default)

    Returns:
        Builder ready for build_tree()
    """
    _expect(data, dict, "Rename tree")
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    builder = Builder()
    builder.with_dir_operations(_operation_list(data, "dir_operations", parse_dir_operation))
    builder.with_file_operations(_operation_list(data, "file_operations", parse_file_operation))
    builder.with_directories(_parse_directory(d, base_dir) for d in _expect(data.get("directories", []), list, "directories"))
    builder.with_files(_parse_file(f, base_dir) for f in _expect(data.get("files", []), list, "files"))
    return builder


def builders_from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> List[Builder]:
    """One builder per tree; a document without "trees" is a single tree"""
    _expect(data, dict, "Rename script")
    if "trees" in data:
        trees = _expect(data["trees"], list, "trees")
        return [builder_from_dict(t, base_dir) for t in trees]
    return [builder_from_dict(data, base_dir)]


def read_script(path: Path) -> Dict[str, Any]:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise FilesystemError(f"Cannot read script {path}", e) from e
    except json.JSONDecodeError as e:
        raise ScriptFormatError(f"Invalid JSON in {path}: {e}") from e
    return data


def load_script(path: Path, base_dir: Optional[Path] = None) -> List[Builder]:
    """
    Load a JSON rule script

    Args:
        path: Script file
        base_dir: Directory for relative paths (the script's folder by default)

    Returns:
        One builder per tree in the script
    """
    path = Path(path)
    data = read_script(path)
    builders = builders_from_dict(data, base_dir if base_dir is not None else path.resolve().parent)
    logger.debug("[ScriptLoader] %s: %d trees", path, len(builders))
    return builders


def attach_directories(builders: List[Builder], directories, recursive: bool = False) -> List[Builder]:
    """
    Add directories chosen at run time to the first tree of a script

    They get no rules of their own, only the tree's default operations.
    """
    directories = list(directories)
    if not directories:
        return builders
    if not builders:
        builders = [Builder()]
    for d in directories:
        builders[0].with_directory(DirItem(path=Path(d).resolve(), recursive=recursive))
    return builders
