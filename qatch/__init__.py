"""Qatch - Quick Patch Tool.

Find and replace hex byte patterns with ``??`` wildcards inside binary files.
"""

from .patching import PatchEngine, PatchReport, PatternResult, ResultKind, parse_pattern, run_patches
from .controller import patch_file

__all__ = [
    "PatchEngine",
    "PatchReport",
    "PatternResult",
    "ResultKind",
    "parse_pattern",
    "run_patches",
    "patch_file",
]
