"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileItem: one file and its computed destination
- DirItem: a directory whose files share operations
- RenameResult: a committed (or simulated) rename
- WalkOptions: directory walking policy
- Enums shared by the rule language (Selection, SortDirection, CaseStyle)
- Path helpers that read name/stem/extension the same way everywhere
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Tuple, Any
from enum import Enum


class Selection(Enum):
    """Which occurrence(s) a replacement touches"""
    FIRST = "first"
    LAST = "last"
    ALL = "all"


class SortDirection(Enum):
    """Sort direction enumeration"""
    ASCENDING = "ascending"
    DESCENDING = "descending"


class DirInclusion(Enum):
    """Where a walk reports directory entries themselves"""
    SKIP = "skip"        # Files only
    FIRST = "first"      # Directory before its contents
    LAST = "last"        # Directory after its contents


class CaseStyle(Enum):
    """Case styles understood by ConvertCase"""
    UPPER = "upper"                # HELLO WORLD
    LOWER = "lower"                # hello world
    TITLE = "title"                # Hello World
    SENTENCE = "sentence"          # Hello world
    TOGGLE = "toggle"              # hELLO wORLD
    CAMEL = "camel"                # helloWorld
    PASCAL = "pascal"              # HelloWorld
    SNAKE = "snake"                # hello_world
    UPPER_SNAKE = "upper_snake"    # HELLO_WORLD
    KEBAB = "kebab"                # hello-world
    COBOL = "cobol"                # HELLO-WORLD
    TRAIN = "train"                # Hello-World
    FLAT = "flat"                  # helloworld
    UPPER_FLAT = "upper_flat"      # HELLOWORLD


@dataclass
class WalkOptions:
    """Directory walking policy for recursive directories"""
    dir_inclusions: DirInclusion = DirInclusion.SKIP
    max_depth: Optional[int] = None     # None means unlimited
    fail_on_depth: bool = True          # Raise instead of stopping at max_depth
    canonicalize: bool = True           # Resolve symlinks and make paths absolute
    ignore_dirs: List[str] = field(default_factory=list)


@dataclass
class FileItem:
    """A file taking part in a rename run"""
    source: Path                                   # Identity, never changed by operations
    operations: Tuple[Any, ...] = ()               # File operations bound to this file only
    destination: Optional[Path] = None             # Starts equal to source

    def __post_init__(self):
        self.source = Path(self.source)
        self.operations = tuple(self.operations)
        if self.destination is None:
            self.destination = self.source
        else:
            self.destination = Path(self.destination)

    @property
    def is_same(self) -> bool:
        """Whether the destination still equals the source"""
        return self.source == self.destination

    def destination_path_string(self) -> str:
        """Displayable form of the destination, used by path-level conditions"""
        return str(self.destination)


@dataclass
class DirItem:
    """A directory and the operations applied to the files found in it"""
    path: Path
    recursive: bool = False
    dir_operations: Tuple[Any, ...] = ()
    file_operations: Tuple[Any, ...] = ()
    walk_options: WalkOptions = field(default_factory=WalkOptions)
    contents: List[FileItem] = field(default_factory=list)
    built: bool = False

    def __post_init__(self):
        self.path = Path(self.path)
        self.dir_operations = tuple(self.dir_operations)
        self.file_operations = tuple(self.file_operations)


@dataclass(frozen=True)
class RenameResult:
    """Rename executed (or simulated) for one file"""
    source: Path
    destination: Path

    @property
    def is_same(self) -> bool:
        return self.source == self.destination

    @property
    def is_case_only_change(self) -> bool:
        """Whether it's only a case change"""
        return (self.source.parent == self.destination.parent and
                self.source.name.lower() == self.destination.name.lower() and
                self.source.name != self.destination.name)


def file_name_of(path: Path) -> Optional[str]:
    """Final path component, or None for paths like '/', '' or '..'"""
    name = path.name
    if not name or name in (".", ".."):
        return None
    return name


def split_name(name: str) -> Tuple[str, Optional[str]]:
    """
    Split a file name into stem and extension

    The extension is the text after the last dot, without the dot. A leading
    dot does not start an extension (".bashrc" has none); a trailing dot gives
    an empty extension ("notes." -> ("notes", "")).
    """
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem:
        return name, None
    return stem, extension


def file_extension_of(path: Path) -> Optional[str]:
    name = file_name_of(path)
    if name is None:
        return None
    return split_name(name)[1]


def file_stem_of(path: Path) -> Optional[str]:
    name = file_name_of(path)
    if name is None:
        return None
    return split_name(name)[0]


def with_file_name(path: Path, name: str) -> Path:
    """Replace the final component, or append one if the path has none"""
    if file_name_of(path) is None:
        return path / name
    return path.parent / name
