from __future__ import annotations

from typing import Any, Dict, Iterable


def total_length(strings: Iterable[str]) -> int:
    """
    Sum of the lengths of all strings (0 for an empty list).

    Lengths are Unicode code points (`len`), not grapheme clusters: a base
    letter followed by a combining mark counts as 2.
    """
    return sum(len(s) for s in strings)


def run(args: Dict[str, Any]) -> str:
    """
    args:
      - strings: string[]
    """
    strings = args.get("strings")
    if not isinstance(strings, list) or not all(isinstance(s, str) for s in strings):
        raise ValueError("TotalLengthOfStrings: 'strings' must be an array of strings")
    return f"Total length of all strings: {total_length(strings)}"
