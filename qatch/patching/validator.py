"""Find/replace pair validation."""

from __future__ import annotations

from typing import Optional, Tuple

from ..exceptions import (
    LengthMismatchError,
    MalformedPatternError,
    PairValidationError,
    PatternError,
    TooShortError,
)
from ..utils.result import Err, Ok, Result
from .pattern import Pattern, parse_pattern

PatternPair = Tuple[Pattern, Pattern]


def _slot_count(result: Result[Pattern, PatternError]) -> Optional[int]:
    """Slot count if known: parsed patterns and non-empty too-short ones carry it."""
    if isinstance(result, Ok):
        return len(result.value)
    if isinstance(result.error, TooShortError):
        return result.error.details.get("length") or None
    return None


def validate_pair(
    find: Result[Pattern, PatternError],
    replace: Result[Pattern, PatternError],
) -> Result[PatternPair, PairValidationError]:
    """Check that both sides parsed and have the same slot count.

    A length mismatch is reported ahead of a too-short side whenever both
    slot counts are known, so ``("AABB", "AA")`` is a mismatch rather than a
    malformed pattern. All-wildcard patterns are accepted on either side.
    """
    find_len = _slot_count(find)
    replace_len = _slot_count(replace)
    if find_len is not None and replace_len is not None and find_len != replace_len:
        return Err(LengthMismatchError(find_len, replace_len))

    if isinstance(find, Ok) and isinstance(replace, Ok):
        return Ok((find.value, replace.value))

    find_error = find.error if isinstance(find, Err) else None
    replace_error = replace.error if isinstance(replace, Err) else None
    if find_error is not None and replace_error is not None:
        side = "both"
    elif find_error is not None:
        side = "find"
    else:
        side = "replace"
    return Err(MalformedPatternError(side, find_error, replace_error))


def parse_pair(find_raw: str, replace_raw: str) -> Result[PatternPair, PairValidationError]:
    """Parse and validate a raw find/replace pair in one step."""
    return validate_pair(parse_pattern(find_raw), parse_pattern(replace_raw))
