"""Patch a file on disk: backup, read, run the engine, write back."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .core.file_utils import DEFAULT_BACKUP_SUFFIX, create_backup, read_target, validate_target, write_target
from .exceptions import FileOperationError
from .logging_config import LoggingTimer
from .patching.engine import PatchEngine, PatchReport, RawPair

logger = logging.getLogger(__name__)

LogCallback = Callable[[str], None]


@dataclass
class FilePatchResult:
    target: Path
    report: PatchReport
    written: bool = False
    backup_path: Optional[Path] = None
    dry_run: bool = False

    @property
    def modified(self) -> bool:
        return self.report.modified

    def to_dict(self) -> Dict[str, Any]:
        payload = self.report.to_dict()
        payload.update({
            "target": str(self.target),
            "written": self.written,
            "backup_path": str(self.backup_path) if self.backup_path else None,
            "dry_run": self.dry_run,
        })
        return payload


def patch_file(
    target_path: Union[str, Path],
    pairs: Sequence[RawPair],
    *,
    backup: bool = False,
    backup_suffix: str = DEFAULT_BACKUP_SUFFIX,
    dry_run: bool = False,
    log_cb: Optional[LogCallback] = None,
    engine: Optional[PatchEngine] = None,
) -> FilePatchResult:
    """Apply ``pairs`` to the file at ``target_path``.

    The file is only rewritten when the engine reports a modification and
    ``dry_run`` is off. A dry run also skips the backup.

    Raises:
        InvalidPathError / FileOperationError: on validation or I/O failures
    """
    def emit(message: str) -> None:
        if log_cb is not None:
            log_cb(message)

    target = validate_target(target_path)
    engine = engine or PatchEngine()

    backup_path: Optional[Path] = None
    if backup and not dry_run:
        backup_path = create_backup(target, backup_suffix)
        emit(f"Created backup: {backup_path}")

    buffer = read_target(target)
    with LoggingTimer(f"patch {target.name} ({len(buffer)} bytes, {len(pairs)} pattern(s))"):
        report = engine.run(buffer, pairs)

    for result in report.results:
        emit(result.message())

    written = False
    if report.modified and not dry_run:
        write_target(target, buffer)
        written = True
        emit("File successfully patched")
    elif report.modified:
        emit("Dry run: changes not written")
    else:
        emit("No changes made")

    logger.info("Patched %s: %s, written=%s", target, report.summary(), written)
    return FilePatchResult(target, report, written=written, backup_path=backup_path, dry_run=dry_run)


def write_report_json(result: FilePatchResult, output_path: Union[str, Path]) -> Path:
    """Dump the run result as JSON."""
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
    except OSError as exc:
        raise FileOperationError(f"Cannot write report {path}: {exc}", file_path=str(path),
                                 operation="report") from exc
    return path
