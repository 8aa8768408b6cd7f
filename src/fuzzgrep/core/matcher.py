"""
Fuzzy line matcher for fuzzgrep.

A line matches when every character of the pattern appears in it in order,
not necessarily contiguously. Matching is case-sensitive.
"""

from typing import Callable

Matcher = Callable[[str, str], bool]


def fuzzy_match(pattern: str, text: str) -> bool:
    """Return True if pattern fuzzily matches text."""
    if len(pattern) > len(text):
        return False
    # Each `in` consumes the iterator up to the found character
    remaining = iter(text)
    return all(ch in remaining for ch in pattern)
