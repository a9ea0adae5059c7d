import pytest

from renamer.errors import CanonicalizeError, MaxDepthReachedError, ReadDirError
from renamer.models_fs import DirInclusion, WalkOptions
from renamer.scan_files import canonicalize, list_directory, walk


@pytest.fixture
def tree(root, make_files):
    """
    root/
      b.txt, a.txt
      skip/e.txt
      sub/c.txt
      sub/deeper/d.txt
    """
    make_files(root, "b.txt", "a.txt", "skip/e.txt", "sub/c.txt", "sub/deeper/d.txt")
    return root


def test_walk_visits_in_name_order(tree):
    assert walk(tree) == [
        tree / "a.txt",
        tree / "b.txt",
        tree / "skip" / "e.txt",
        tree / "sub" / "c.txt",
        tree / "sub" / "deeper" / "d.txt",
    ]


def test_walk_ignore_dirs(tree):
    paths = walk(tree, WalkOptions(ignore_dirs=["skip", "deeper"]))
    assert paths == [tree / "a.txt", tree / "b.txt", tree / "sub" / "c.txt"]


def test_walk_directories_first(tree):
    assert walk(tree, WalkOptions(dir_inclusions=DirInclusion.FIRST)) == [
        tree,
        tree / "a.txt",
        tree / "b.txt",
        tree / "skip",
        tree / "skip" / "e.txt",
        tree / "sub",
        tree / "sub" / "c.txt",
        tree / "sub" / "deeper",
        tree / "sub" / "deeper" / "d.txt",
    ]


def test_walk_directories_last(tree):
    assert walk(tree, WalkOptions(dir_inclusions=DirInclusion.LAST)) == [
        tree / "a.txt",
        tree / "b.txt",
        tree / "skip" / "e.txt",
        tree / "skip",
        tree / "sub" / "c.txt",
        tree / "sub" / "deeper" / "d.txt",
        tree / "sub" / "deeper",
        tree / "sub",
        tree,
    ]


def test_walk_max_depth_fails(tree):
    with pytest.raises(MaxDepthReachedError) as exc:
        walk(tree, WalkOptions(max_depth=1))
    assert exc.value.max_depth == 1


def test_walk_max_depth_stops_quietly(tree):
    assert walk(tree, WalkOptions(max_depth=1, fail_on_depth=False)) == [tree / "a.txt", tree / "b.txt"]
    assert walk(tree, WalkOptions(max_depth=2, fail_on_depth=False)) == [
        tree / "a.txt",
        tree / "b.txt",
        tree / "skip" / "e.txt",
        tree / "sub" / "c.txt",
    ]


def test_walk_max_depth_reports_cut_directory(tree):
    options = WalkOptions(dir_inclusions=DirInclusion.FIRST, max_depth=2, fail_on_depth=False)
    assert walk(tree, options)[-1] == tree / "sub" / "deeper"


def test_walk_missing_directory(root):
    with pytest.raises(ReadDirError) as exc:
        walk(root / "missing")
    assert isinstance(exc.value.os_error, OSError)


def test_list_directory_files_only(tree):
    assert list_directory(tree) == [tree / "a.txt", tree / "b.txt"]


def test_canonicalize(tree):
    assert canonicalize(tree / "sub" / ".." / "a.txt") == tree / "a.txt"
    with pytest.raises(CanonicalizeError):
        canonicalize(tree / "nope.txt")
