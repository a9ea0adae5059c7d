"""
match_rules.py - Match Rules

Boolean predicates over a single string (a file name or a full path).
Rules are immutable and can be shared by any number of operations.
"""

from dataclasses import dataclass, field
from typing import Pattern, Union

from .text_match import contains, begins_with, ends_with, compile_pattern


@dataclass(frozen=True)
class Equals:
    value: str


@dataclass(frozen=True)
class Contains:
    value: str


@dataclass(frozen=True)
class BeginsWith:
    value: str


@dataclass(frozen=True)
class EndsWith:
    value: str


@dataclass(frozen=True)
class Matches:
    """Regular expression search; the pattern is compiled on construction"""
    pattern: str
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))


@dataclass(frozen=True)
class Not:
    rule: "MatchRule"


@dataclass(frozen=True)
class And:
    left: "MatchRule"
    right: "MatchRule"


@dataclass(frozen=True)
class Or:
    left: "MatchRule"
    right: "MatchRule"


MatchRule = Union[Equals, Contains, BeginsWith, EndsWith, Matches, Not, And, Or]


def resolve(rule: MatchRule, text: str) -> bool:
    """
    Evaluate a match rule against a string

    Args:
        rule: Rule tree
        text: Value to test

    Returns:
        Whether the rule matches
    """
    if isinstance(rule, Equals):
        return text == rule.value
    elif isinstance(rule, Contains):
        return contains(text, rule.value)
    elif isinstance(rule, BeginsWith):
        return begins_with(text, rule.value)
    elif isinstance(rule, EndsWith):
        return ends_with(text, rule.value)
    elif isinstance(rule, Matches):
        return rule.regex.search(text) is not None
    elif isinstance(rule, Not):
        return not resolve(rule.rule, text)
    elif isinstance(rule, And):
        return resolve(rule.left, text) and resolve(rule.right, text)
    elif isinstance(rule, Or):
        return resolve(rule.left, text) or resolve(rule.right, text)
    else:
        raise TypeError(f"Unknown match rule: {rule!r}")
