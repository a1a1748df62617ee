"""Byte pattern patching.

- Pattern parsing: hex strings with ``??`` wildcard bytes
- Pair validation: both sides parsed and of equal length
- Matching: every overlapping offset of a pattern in a buffer
- Replacement: wildcard-preserving writes
- Engine: ordered processing of find/replace pairs with per-pair results
"""

from .pattern import (
    MIN_PATTERN_LENGTH,
    ByteSlot,
    Pattern,
    clean_pattern,
    format_pattern,
    parse_pattern,
)
from .validator import (
    parse_pair,
    validate_pair,
)
from .matcher import (
    find_all,
    iter_matches,
    matches_at,
)
from .replacer import (
    ReplaceOutcome,
    apply_replacements,
)
from .engine import (
    PatchEngine,
    PatchReport,
    PatternResult,
    ResultKind,
    run_patches,
)

__all__ = [
    # Parsing
    "MIN_PATTERN_LENGTH",
    "ByteSlot",
    "Pattern",
    "clean_pattern",
    "format_pattern",
    "parse_pattern",
    # Validation
    "parse_pair",
    "validate_pair",
    # Matching
    "find_all",
    "iter_matches",
    "matches_at",
    # Replacement
    "ReplaceOutcome",
    "apply_replacements",
    # Engine
    "PatchEngine",
    "PatchReport",
    "PatternResult",
    "ResultKind",
    "run_patches",
]
