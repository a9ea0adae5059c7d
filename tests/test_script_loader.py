import json

import pytest

from renamer import Script
from renamer.dir_ops import IncludeOnly, OffsetLocalIndex, Remove, Sort
from renamer.errors import FilesystemError, InvalidPatternError, ScriptFormatError
from renamer.expressions import (
    AtIndex, AtStart, Combine, Constant, ConvertCase, FileStem, If, Insert,
    LocalIndex, Replace, ToUpper, evaluate,
)
from renamer.file_ops import IfOp, Sequence, SetExtension, SetStem
from renamer.engine_state import EngineState
from renamer.match_rules import And, BeginsWith, Contains, EndsWith, Equals, Matches, Not, resolve
from renamer.models_fs import CaseStyle, Selection, SortDirection
from renamer.rename_tree import Builder
from renamer.script_loader import (
    MAX_NESTING,
    attach_directories,
    builder_from_dict,
    builders_from_dict,
    load_script,
    parse_dir_operation,
    parse_expression,
    parse_file_operation,
    parse_match_rule,
)


def test_string_is_constant():
    assert parse_expression("abc") == Constant("abc")


def test_combine_parts_keep_order():
    expr = parse_expression({"type": "combine", "parts": ["a", {"type": "file_stem"}, "c"]})
    assert expr == Combine(Combine(Constant("a"), FileStem()), Constant("c"))

    expr = parse_expression({"type": "combine", "parts": list("abcdefg")})
    assert evaluate(expr, EngineState()) == "abcdefg"


def test_combine_lhs_rhs():
    assert parse_expression({"type": "combine", "lhs": "a", "rhs": "b"}) == Combine(Constant("a"), Constant("b"))


def test_nested_expression():
    expr = parse_expression({
        "type": "if",
        "condition": {"type": "ends_with", "value": ".jpg"},
        "then": {"type": "upper", "input": {"type": "file_stem"}},
        "else": {"type": "local_index", "padding": 3, "start": 1},
    })
    assert expr == If(EndsWith(".jpg"), ToUpper(FileStem()), LocalIndex(padding=3, start=1))


def test_replace_defaults_to_all():
    expr = parse_expression({"type": "replace", "content": {"type": "file_stem"}, "match": " ", "replacement": "_"})
    assert expr == Replace(FileStem(), Selection.ALL, Constant(" "), Constant("_"))


def test_convert_case_style():
    expr = parse_expression({"type": "convert_case", "style": "Snake", "input": "A B"})
    assert expr == ConvertCase(CaseStyle.SNAKE, Constant("A B"))


def test_insert_positions():
    assert parse_expression({"type": "insert", "position": "start", "base": "b", "text": "t"}) == \
        Insert(AtStart(), Constant("b"), Constant("t"))
    expr = parse_expression({
        "type": "insert",
        "position": {"at": "index", "index": 2, "clamp": False},
        "base": "b",
        "text": "t",
    })
    assert expr.position == AtIndex(2, clamp=False)


def test_match_rule_combinators():
    rule = parse_match_rule({
        "type": "and",
        "rules": [
            {"type": "begins_with", "value": "img"},
            {"type": "not", "rule": {"type": "contains", "value": "draft"}},
            {"type": "matches", "pattern": r"\d+"},
        ],
    })
    assert rule == And(And(BeginsWith("img"), Not(Contains("draft"))), Matches(r"\d+"))


def test_file_operations():
    op = parse_file_operation({
        "op": "if",
        "condition": {"type": "contains", "value": "raw"},
        "then": {"op": "sequence", "operations": [
            {"op": "set_stem", "value": "x"},
            {"op": "set_extension", "value": "dng"},
        ]},
    })
    assert op == IfOp(Contains("raw"), Sequence((SetStem(Constant("x")), SetExtension(Constant("dng")))))


def test_dir_operations():
    assert parse_dir_operation({"op": "sort", "direction": "descending"}) == Sort(SortDirection.DESCENDING)
    assert parse_dir_operation({"op": "sort"}) == Sort(SortDirection.ASCENDING)
    assert parse_dir_operation({"op": "remove", "rule": {"type": "ends_with", "value": ".tmp"}}) == \
        Remove(EndsWith(".tmp"))
    assert parse_dir_operation({"op": "include_only", "rule": {"type": "equals", "value": "a"}}) == \
        IncludeOnly(Equals("a"))
    assert parse_dir_operation({"op": "offset_local_index", "value": 5}) == OffsetLocalIndex(5)


@pytest.mark.parametrize(
    "parse, data",
    [
        (parse_expression, {"type": "unknown"}),
        (parse_expression, {"value": "no type"}),
        (parse_expression, 42),
        (parse_expression, {"type": "variable"}),
        (parse_expression, {"type": "assign", "name": "local_index", "value": "5"}),
        (parse_expression, {"type": "assign", "name": "global_index", "value": "5"}),
        (parse_expression, {"type": "local_index", "padding": "3"}),
        (parse_expression, {"type": "local_index", "padding": True}),
        (parse_expression, {"type": "replace", "content": "a", "match": "b", "replacement": "c", "selection": "middle"}),
        (parse_expression, {"type": "combine", "parts": []}),
        (parse_expression, {"type": "insert", "position": {"at": "nowhere"}, "base": "a", "text": "b"}),
        (parse_match_rule, {"type": "or", "rules": [{"type": "equals", "value": "a"}]}),
        (parse_match_rule, {"type": "equals", "value": 1}),
        (parse_file_operation, {"op": "delete"}),
        (parse_dir_operation, {"op": "offset_local_index", "value": -1}),
        (parse_dir_operation, {"op": "shuffle"}),
    ],
)
def test_format_errors(parse, data):
    with pytest.raises(ScriptFormatError):
        parse(data)


def test_nesting_limit():
    data = "x"
    for _ in range(MAX_NESTING + 1):
        data = {"type": "upper", "input": data}
    with pytest.raises(ScriptFormatError):
        parse_expression(data)


def test_long_combine_stays_shallow():
    expr = parse_expression({"type": "combine", "parts": ["a"] * 5000})
    assert evaluate(expr, EngineState()) == "a" * 5000


def test_long_rule_list_stays_shallow():
    rule = parse_match_rule({"type": "and", "rules": [{"type": "contains", "value": ""}] * 5000})
    assert resolve(rule, "anything")

    rules = [{"type": "equals", "value": str(i)} for i in range(5000)]
    rule = parse_match_rule({"type": "or", "rules": rules})
    assert resolve(rule, "4999")
    assert not resolve(rule, "5000")


def test_bad_regex_in_script():
    with pytest.raises(InvalidPatternError):
        parse_match_rule({"type": "matches", "pattern": "("})


def test_builder_from_dict(root):
    builder = builder_from_dict(
        {
            "dir_operations": [{"op": "sort"}],
            "file_operations": [{"op": "set_stem", "value": "x"}],
            "directories": [
                "photos",
                {"path": "music", "recursive": True, "max_depth": 3, "ignore_dirs": [".git"],
                 "file_operations": [{"op": "set_extension", "value": "mp3"}]},
            ],
            "files": ["notes.txt", {"path": "/abs/a.txt"}],
        },
        base_dir=root,
    )

    assert builder.dir_operations == [Sort()]
    assert builder.file_operations == [SetStem(Constant("x"))]

    photos, music = builder.directories
    assert photos.path == root / "photos"
    assert not photos.recursive
    assert music.recursive
    assert music.walk_options.max_depth == 3
    assert music.walk_options.ignore_dirs == [".git"]
    assert music.file_operations == (SetExtension(Constant("mp3")),)

    assert [f.source.name for f in builder.files] == ["notes.txt", "a.txt"]
    assert builder.files[0].source == root / "notes.txt"


def test_builders_from_dict_trees(root):
    builders = builders_from_dict({"trees": [{"files": ["a"]}, {"files": ["b"]}]}, base_dir=root)
    assert len(builders) == 2
    assert builders[1].files[0].source == root / "b"


def test_load_script_resolves_against_script_folder(root, photo_dir):
    script = root / "rules.json"
    script.write_text(json.dumps({
        "file_operations": [{"op": "set_stem", "value": {"type": "combine", "parts": [
            "img_", {"type": "local_index", "padding": 2}]}}],
        "directories": [{"path": "photos", "dir_operations": [
            {"op": "include_only", "rule": {"type": "ends_with", "value": ".jpg"}}]}],
    }), encoding="utf-8")

    builders = load_script(script)
    results = Script(b.build_tree() for b in builders).dry_run()
    assert [(r.source.name, r.destination.name) for r in results] == [
        ("a.jpg", "img_00.jpg"),
        ("b.jpg", "img_01.jpg"),
    ]


def test_load_script_errors(root):
    with pytest.raises(FilesystemError):
        load_script(root / "missing.json")

    broken = root / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ScriptFormatError):
        load_script(broken)


def test_attach_directories(root, photo_dir):
    builders = attach_directories([], [photo_dir], recursive=True)
    assert len(builders) == 1
    assert builders[0].directories[0].path == photo_dir
    assert builders[0].directories[0].recursive

    first, second = Builder(), Builder()
    assert attach_directories([first, second], [photo_dir]) == [first, second]
    assert len(first.directories) == 1
    assert second.directories == []

    assert attach_directories([first], []) == [first]
