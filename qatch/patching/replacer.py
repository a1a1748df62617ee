"""Apply a replace pattern at matched offsets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .pattern import Pattern


@dataclass(frozen=True)
class ReplaceOutcome:
    """What a replacement pass did to the buffer."""

    bytes_written: int = 0
    bytes_changed: int = 0

    @property
    def modified(self) -> bool:
        return self.bytes_changed > 0


def write_plan(find: Pattern, replace: Pattern) -> List[Tuple[int, int]]:
    """(index, value) pairs that get written for each match.

    A position is written only when neither side is a wildcard.
    """
    return [
        (j, r.value)
        for j, (f, r) in enumerate(zip(find.slots, replace.slots))
        if not f.is_wildcard and not r.is_wildcard
    ]


def apply_replacements(
    buffer: bytearray,
    find: Pattern,
    replace: Pattern,
    offsets: Iterable[int],
) -> ReplaceOutcome:
    """Write ``replace`` over ``buffer`` at every offset, in the given order.

    Overlapping offsets are applied progressively: a later offset sees the
    bytes written for an earlier one. The outcome counts every write and,
    separately, the writes that changed a byte; only the latter mark the
    buffer as modified.

    Raises:
        ValueError: if the patterns differ in length or an offset window
            runs outside the buffer
    """
    if len(find) != len(replace):
        raise ValueError(f"Pattern length mismatch: {len(find)} vs {len(replace)}")

    plan = write_plan(find, replace)
    pattern_len = len(find)
    written = 0
    changed = 0

    for offset in offsets:
        if offset < 0 or offset + pattern_len > len(buffer):
            raise ValueError(f"Offset {offset} out of range for buffer of {len(buffer)} bytes")
        for j, value in plan:
            if buffer[offset + j] != value:
                buffer[offset + j] = value
                changed += 1
            written += 1

    return ReplaceOutcome(bytes_written=written, bytes_changed=changed)
