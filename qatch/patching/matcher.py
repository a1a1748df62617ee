"""Wildcard-aware byte pattern matching.

Plain brute-force scan: every offset is tested, and a hit does not advance the
scan past the matched window, so overlapping occurrences are all reported.
"""

from __future__ import annotations

from typing import Iterator, List, Union

from .pattern import Pattern

Buffer = Union[bytes, bytearray, memoryview]


def matches_at(buffer: Buffer, pattern: Pattern, offset: int) -> bool:
    """Return True if ``pattern`` matches ``buffer`` starting at ``offset``."""
    if offset < 0 or offset + len(pattern) > len(buffer):
        return False
    for j, slot in enumerate(pattern.slots):
        if not slot.is_wildcard and buffer[offset + j] != slot.value:
            return False
    return True


def iter_matches(buffer: Buffer, pattern: Pattern) -> Iterator[int]:
    """Yield match offsets in ascending order."""
    pattern_len = len(pattern)
    if pattern_len == 0 or pattern_len > len(buffer):
        return

    slots = pattern.slots
    for i in range(len(buffer) - pattern_len + 1):
        for j in range(pattern_len):
            slot = slots[j]
            if not slot.is_wildcard and buffer[i + j] != slot.value:
                break
        else:
            yield i


def find_all(buffer: Buffer, pattern: Pattern) -> List[int]:
    """Find every (possibly overlapping) offset where ``pattern`` matches.

    Args:
        buffer: Bytes to scan
        pattern: Parsed pattern; wildcard slots match any byte

    Returns:
        Strictly increasing list of start offsets, empty when the pattern is
        empty or longer than the buffer
    """
    return list(iter_matches(buffer, pattern))
