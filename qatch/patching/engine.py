"""Patch engine - applies find/replace pattern pairs to an in-memory buffer.

Pairs are processed strictly in the order given, against one shared buffer, so
a later pair matches against bytes already rewritten by earlier pairs. A bad
pair is reported and skipped; it never aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import LengthMismatchError, PairValidationError
from ..utils.result import Err
from .matcher import find_all
from .pattern import parse_pattern
from .replacer import apply_replacements
from .validator import validate_pair

logger = logging.getLogger(__name__)

RawPair = Tuple[str, str]


class ResultKind(Enum):
    """Outcome of a single find/replace pair."""

    REPLACED = "replaced"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass
class PatternResult:
    """Result of processing one pattern pair."""

    kind: ResultKind
    find: str
    replace: str
    count: int = 0
    offsets: List[int] = field(default_factory=list)
    bytes_written: int = 0
    bytes_changed: int = 0
    reason: Optional[str] = None
    error: Optional[PairValidationError] = None

    @classmethod
    def invalid(cls, find: str, replace: str, error: PairValidationError) -> "PatternResult":
        return cls(ResultKind.INVALID, find, replace, reason=str(error), error=error)

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code if self.error is not None else None

    def message(self) -> str:
        """One human-readable outcome line."""
        if self.kind is ResultKind.REPLACED:
            return f"Replaced {self.count} instances of {self.find}"
        if self.kind is ResultKind.NOT_FOUND:
            return f"Pattern not found: {self.find}"
        if isinstance(self.error, LengthMismatchError):
            return (
                f"Pattern length mismatch: {self.find} ({self.error.find_len}) "
                f"vs {self.replace} ({self.error.replace_len})"
            )
        return f"Invalid pattern: {self.find}:{self.replace}"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "kind": self.kind.value,
            "find": self.find,
            "replace": self.replace,
            "message": self.message(),
        }
        if self.kind is ResultKind.REPLACED:
            payload["count"] = self.count
            payload["offsets"] = list(self.offsets)
            payload["bytes_written"] = self.bytes_written
            payload["bytes_changed"] = self.bytes_changed
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        return payload


@dataclass
class PatchReport:
    """Ordered per-pair results plus the run-level modified flag."""

    modified: bool = False
    results: List[PatternResult] = field(default_factory=list)

    @property
    def replaced_count(self) -> int:
        return sum(r.count for r in self.results if r.kind is ResultKind.REPLACED)

    def by_kind(self, kind: ResultKind) -> List[PatternResult]:
        return [r for r in self.results if r.kind is kind]

    def summary(self) -> str:
        totals = {kind.value: len(self.by_kind(kind)) for kind in ResultKind}
        return ", ".join(f"{key}: {value}" for key, value in totals.items())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modified": self.modified,
            "replaced_count": self.replaced_count,
            "results": [r.to_dict() for r in self.results],
        }


class PatchEngine:
    """Runs find/replace pairs over a mutable byte buffer.

    Holds no state between runs.
    """

    def process_pair(self, buffer: bytearray, find_raw: str, replace_raw: str) -> PatternResult:
        """Parse, validate, match and replace a single pair."""
        find_raw = find_raw or ""
        replace_raw = replace_raw or ""

        validated = validate_pair(parse_pattern(find_raw), parse_pattern(replace_raw))
        if isinstance(validated, Err):
            result = PatternResult.invalid(find_raw, replace_raw, validated.error)
            logger.info("%s (%s)", result.message(), result.reason)
            return result

        find, replace = validated.value
        offsets = find_all(buffer, find)
        if not offsets:
            logger.info("Pattern not found: %s", find_raw)
            return PatternResult(ResultKind.NOT_FOUND, find_raw, replace_raw)

        logger.debug("Pattern %s matched at offsets %s", find_raw, [hex(o) for o in offsets])
        outcome = apply_replacements(buffer, find, replace, offsets)
        result = PatternResult(
            ResultKind.REPLACED,
            find_raw,
            replace_raw,
            count=len(offsets),
            offsets=offsets,
            bytes_written=outcome.bytes_written,
            bytes_changed=outcome.bytes_changed,
        )
        logger.info("%s (%d byte(s) changed)", result.message(), outcome.bytes_changed)
        return result

    def run(self, buffer: bytearray, pairs: Iterable[RawPair]) -> PatchReport:
        """Apply every pair in order and collect the report."""
        report = PatchReport()
        for find_raw, replace_raw in pairs:
            result = self.process_pair(buffer, find_raw, replace_raw)
            report.results.append(result)
            if result.bytes_changed > 0:
                report.modified = True
        logger.debug("Patch run finished: %s, modified=%s", report.summary(), report.modified)
        return report


def run_patches(buffer: bytearray, pairs: Sequence[RawPair]) -> Tuple[bool, List[PatternResult]]:
    """Convenience wrapper returning ``(modified, results)``."""
    report = PatchEngine().run(buffer, pairs)
    return report.modified, report.results
