"""Hex pattern parsing.

Pattern strings are hex digits with optional ``??`` wildcard bytes. Anything
that is not a hex digit or ``?`` is dropped before parsing, so ``"41 ?? 43"``,
``"41:??:43"`` and ``"41??43"`` all describe the same three-byte pattern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union, overload

from ..exceptions import InvalidHexPairError, OddLengthError, PatternError, TooShortError
from ..utils.result import Err, Ok, Result

MIN_PATTERN_LENGTH = 2
WILDCARD_TOKEN = "??"

_STRIP_RE = re.compile(r"[^0-9A-Fa-f?]")


@dataclass(frozen=True)
class ByteSlot:
    """A single pattern position: a concrete byte or a wildcard."""

    value: int = 0
    is_wildcard: bool = False

    @classmethod
    def wildcard(cls) -> "ByteSlot":
        return cls(0, True)

    def __str__(self) -> str:
        return WILDCARD_TOKEN if self.is_wildcard else f"{self.value:02X}"


@dataclass(frozen=True)
class Pattern:
    """Immutable sequence of byte slots.

    ``source`` keeps the raw string the pattern was parsed from and does not
    take part in equality.
    """

    slots: Tuple[ByteSlot, ...]
    source: str = field(default="", compare=False)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Pattern":
        return cls(tuple(ByteSlot(b) for b in data), data.hex().upper())

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[ByteSlot]:
        return iter(self.slots)

    @overload
    def __getitem__(self, index: int) -> ByteSlot: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[ByteSlot, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self.slots[index]

    @property
    def wildcard_count(self) -> int:
        return sum(1 for slot in self.slots if slot.is_wildcard)

    @property
    def is_concrete(self) -> bool:
        return self.wildcard_count == 0

    def __str__(self) -> str:
        return format_pattern(self)


def clean_pattern(raw: Optional[str]) -> str:
    """Drop every character that is not a hex digit or '?'."""
    return _STRIP_RE.sub("", raw or "")


def parse_pattern(raw: Optional[str]) -> Result[Pattern, PatternError]:
    """Parse a hex-with-wildcards string.

    Returns ``Ok(Pattern)`` or ``Err`` carrying one of
    :class:`OddLengthError`, :class:`InvalidHexPairError` or
    :class:`TooShortError`. Never raises for bad input.
    """
    source = raw or ""
    cleaned = clean_pattern(source)

    if len(cleaned) % 2 != 0:
        return Err(OddLengthError(source, len(cleaned)))

    slots = []
    for i in range(0, len(cleaned), 2):
        pair = cleaned[i:i + 2]
        if pair == WILDCARD_TOKEN:
            slots.append(ByteSlot.wildcard())
            continue
        # A lone '?' next to a hex digit is neither a byte nor a wildcard
        if "?" in pair:
            return Err(InvalidHexPairError(pair, source))
        slots.append(ByteSlot(int(pair, 16)))

    if len(slots) < MIN_PATTERN_LENGTH:
        return Err(TooShortError(source, len(slots), MIN_PATTERN_LENGTH))

    return Ok(Pattern(tuple(slots), source))


def format_pattern(pattern: Pattern, separator: str = " ") -> str:
    """Render a pattern in canonical upper-case form, e.g. ``41 ?? 43``."""
    return separator.join(str(slot) for slot in pattern.slots)
