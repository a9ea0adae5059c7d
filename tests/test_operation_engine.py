from pathlib import Path

import pytest

from renamer.dir_ops import IncludeOnly, OffsetLocalIndex, Sort
from renamer.errors import VariableNotDefinedError
from renamer.expressions import (
    AssignVariable, Combine, Constant, FileStem, GlobalIndex, LocalIndex, Variable,
)
from renamer.file_ops import NoOp, SetName, SetStem
from renamer.match_rules import EndsWith
from renamer.models_fs import DirItem, FileItem, SortDirection
from renamer.operation_engine import OperationEngine

INDEXED = SetStem(Combine(LocalIndex(), Combine(Constant("_"), GlobalIndex())))


def _dir(path, *names, dir_operations=()):
    return DirItem(
        path=Path(path),
        dir_operations=dir_operations,
        contents=[FileItem(source=Path(path) / n) for n in names],
        built=True,
    )


def _names(files):
    return [f.destination.name for f in files]


def test_indices_across_directories():
    engine = OperationEngine(file_operations=[INDEXED])

    first = engine.process_dir(_dir("/one", "a.txt", "b.txt"))
    second = engine.process_dir(_dir("/two", "c.txt", "d.txt"))

    assert _names(first) == ["0_0.txt", "1_1.txt"]
    assert _names(second) == ["0_2.txt", "1_3.txt"]
    assert engine.global_index == 4
    assert engine.local_index == 2


def test_offset_does_not_carry_over():
    engine = OperationEngine(file_operations=[INDEXED])

    first = engine.process_dir(_dir("/one", "a.txt", "b.txt", dir_operations=[OffsetLocalIndex(10)]))
    second = engine.process_dir(_dir("/two", "c.txt"))

    assert _names(first) == ["10_0.txt", "11_1.txt"]
    assert _names(second) == ["0_2.txt"]


def test_default_operations_run_first():
    engine = OperationEngine(
        dir_operations=[IncludeOnly(EndsWith(".jpg"))],
        file_operations=[SetStem(Constant("x"))],
    )
    directory = DirItem(
        path=Path("/p"),
        dir_operations=[Sort(SortDirection.DESCENDING)],
        contents=[
            FileItem(source=Path("/p/a.jpg"), operations=(SetStem(Combine(FileStem(), LocalIndex())),)),
            FileItem(source=Path("/p/b.jpg"), operations=(SetStem(Combine(FileStem(), LocalIndex())),)),
            FileItem(source=Path("/p/c.txt")),
        ],
    )

    files = engine.process_dir(directory)
    assert [f.source.name for f in files] == ["b.jpg", "a.jpg"]
    assert _names(files) == ["x0.jpg", "x1.jpg"]


def test_defaults_apply_to_every_directory():
    engine = OperationEngine(dir_operations=[Sort(SortDirection.DESCENDING)])
    assert _names(engine.process_dir(_dir("/one", "a", "b"))) == ["b", "a"]
    assert _names(engine.process_dir(_dir("/two", "c", "d"))) == ["d", "c"]


def test_process_dir_takes_contents():
    directory = _dir("/one", "a.txt")
    OperationEngine().process_dir(directory)
    assert directory.contents == []


def test_variables_persist_across_files():
    engine = OperationEngine(file_operations=[NoOp(AssignVariable("last", FileStem()))])
    engine.process_dir(_dir("/one", "first.txt", "second.txt"))
    assert engine.variables["last"] == "second"


def test_error_clears_current_file():
    engine = OperationEngine(file_operations=[SetName(Variable("missing"))])
    with pytest.raises(VariableNotDefinedError):
        engine.process_dir(_dir("/one", "a.txt"))
    assert engine.state.current_file is None


def test_process_file():
    engine = OperationEngine(file_operations=[INDEXED])
    engine.process_dir(_dir("/one", "a.txt"))

    standalone = engine.process_file(FileItem(source=Path("/loose/z.txt")))
    assert standalone.destination.name == "0_1.txt"
    assert engine.global_index == 2
