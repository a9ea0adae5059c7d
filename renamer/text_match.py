"""
text_match.py - Text Matching Tools

String primitives shared by match rules and expressions: bounded
prefix/suffix/substring tests, first/last/all replacement, marker-based
slicing, insertion and case-style conversion. All functions are pure.
"""

from typing import Optional, List, Pattern
import re

from .models_fs import Selection, CaseStyle
from .errors import InsertIndexTooLargeError, InvalidPatternError


def compile_pattern(pattern: str) -> Pattern:
    """Compile a regular expression, reporting syntax errors as InvalidPatternError"""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def contains(text: str, needle: str) -> bool:
    """
    Check if text contains needle

    Args:
        text: Text to check
        needle: Substring to look for (empty string always matches)

    Returns:
        Whether contains
    """
    if len(needle) > len(text):
        return False
    return needle in text


def begins_with(text: str, prefix: str) -> bool:
    if len(prefix) > len(text):
        return False
    return text[:len(prefix)] == prefix


def ends_with(text: str, suffix: str) -> bool:
    if len(suffix) > len(text):
        return False
    return text[len(text) - len(suffix):] == suffix


def replace_text(text: str, old: str, new: str, selection: Selection = Selection.ALL) -> str:
    """
    Replace occurrences of a substring

    Args:
        text: Original text
        old: String to replace
        new: Replacement string
        selection: First, last or all occurrences

    Returns:
        Replaced text (unchanged when old is empty or not found)
    """
    if not old:
        return text

    if selection == Selection.FIRST:
        return text.replace(old, new, 1)

    if selection == Selection.LAST:
        index = text.rfind(old)
        if index < 0:
            return text
        return text[:index] + new + text[index + len(old):]

    return text.replace(old, new)


def regex_replace(text: str, pattern: Pattern, replacement: str,
                  selection: Selection = Selection.ALL) -> str:
    """
    Replace regular expression matches

    The replacement is a re template, so group references such as \\1 work
    in every selection mode.
    """
    if selection == Selection.FIRST:
        return pattern.sub(replacement, text, count=1)

    if selection == Selection.LAST:
        last = None
        for last in pattern.finditer(text):
            pass
        if last is None:
            return text
        return text[:last.start()] + last.expand(replacement) + text[last.end():]

    return pattern.sub(replacement, text)


def left_of(text: str, marker: str, inclusive: bool) -> str:
    """Prefix before the first marker (or up to its end when inclusive)"""
    index = text.find(marker)
    if index < 0:
        return text
    if inclusive:
        index += len(marker)
    return text[:index]


def right_of(text: str, marker: str, inclusive: bool) -> str:
    """Suffix after the first marker (or from its start when inclusive)"""
    index = text.find(marker)
    if index < 0:
        return text
    if not inclusive:
        index += len(marker)
    return text[index:]


def insert_at(text: str, index: int, insertion: str, clamp: bool = True) -> str:
    """
    Insert a string at a character offset

    Args:
        text: Base text
        index: Offset, counted in characters
        insertion: Text to insert
        clamp: Append when index is past the end instead of raising

    Returns:
        Text with the insertion
    """
    if index < 0 or index > len(text):
        if not clamp or index < 0:
            raise InsertIndexTooLargeError(index, len(text))
        index = len(text)
    return text[:index] + insertion + text[index:]


def insert_before(text: str, marker: str, insertion: str) -> Optional[str]:
    index = text.find(marker)
    if index < 0:
        return None
    return text[:index] + insertion + text[index:]


def insert_after(text: str, marker: str, insertion: str) -> Optional[str]:
    index = text.find(marker)
    if index < 0:
        return None
    index += len(marker)
    return text[:index] + insertion + text[index:]


_SEPARATORS = re.compile(r"[\s_\-]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(text: str) -> List[str]:
    """
    Split text into words for case conversion

    Words are separated by whitespace, underscores and hyphens, and by
    lower-to-upper (fileName) or acronym (HTMLFile) boundaries.
    """
    words: List[str] = []
    for chunk in _SEPARATORS.split(text):
        if chunk:
            words.extend(w for w in _CAMEL_BOUNDARY.split(chunk) if w)
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def convert_case(text: str, style: CaseStyle) -> str:
    """
    Convert text to a case style

    Args:
        text: Input text
        style: Target case style

    Returns:
        Converted text, words re-joined with the style's separator
    """
    words = split_words(text)
    if not words:
        return ""

    if style == CaseStyle.UPPER:
        return " ".join(w.upper() for w in words)
    elif style == CaseStyle.LOWER:
        return " ".join(w.lower() for w in words)
    elif style == CaseStyle.TITLE:
        return " ".join(_capitalize(w) for w in words)
    elif style == CaseStyle.SENTENCE:
        return " ".join([_capitalize(words[0])] + [w.lower() for w in words[1:]])
    elif style == CaseStyle.TOGGLE:
        return " ".join(w[:1].lower() + w[1:].upper() for w in words)
    elif style == CaseStyle.CAMEL:
        return words[0].lower() + "".join(_capitalize(w) for w in words[1:])
    elif style == CaseStyle.PASCAL:
        return "".join(_capitalize(w) for w in words)
    elif style == CaseStyle.SNAKE:
        return "_".join(w.lower() for w in words)
    elif style == CaseStyle.UPPER_SNAKE:
        return "_".join(w.upper() for w in words)
    elif style == CaseStyle.KEBAB:
        return "-".join(w.lower() for w in words)
    elif style == CaseStyle.COBOL:
        return "-".join(w.upper() for w in words)
    elif style == CaseStyle.TRAIN:
        return "-".join(_capitalize(w) for w in words)
    elif style == CaseStyle.FLAT:
        return "".join(w.lower() for w in words)
    elif style == CaseStyle.UPPER_FLAT:
        return "".join(w.upper() for w in words)
    else:
        raise ValueError(f"Unknown case style: {style}")


def is_valid_filename(name: str) -> tuple[bool, Optional[str]]:
    """
    Check if filename is valid (mainly for Windows)

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        if char in name:
            return False, f"Filename contains invalid character: {char}"

    if name.endswith(' ') or name.endswith('.'):
        return False, "Filename cannot end with space or dot"

    reserved_names = {
        'CON', 'PRN', 'AUX', 'NUL',
        'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
        'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
    }
    name_upper = name.upper().split('.')[0]
    if name_upper in reserved_names:
        return False, f"Filename is a Windows reserved name: {name_upper}"

    if len(name) > 255:
        return False, "Filename exceeds 255 characters"

    return True, None
