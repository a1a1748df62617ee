#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Qatch - File operations

Everything that touches the filesystem lives here: target validation,
reading the target into a buffer, the optional backup copy and writing the
patched buffer back. The patch engine itself never does I/O.
"""

import os
import logging
import shutil
import tempfile
from typing import Union
from pathlib import Path, PurePosixPath

from ..exceptions import FileOperationError, InvalidPathError

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_SUFFIX = ".BAK"


def validate_target(path: Union[str, Path, None]) -> Path:
    """Check that ``path`` names an existing regular file.

    Raises:
        InvalidPathError: empty path, NUL bytes or a ".." segment
        FileOperationError: missing file or not a regular file
    """
    if path is None or not str(path).strip():
        raise InvalidPathError("Target path is required")
    if "\x00" in str(path):
        raise InvalidPathError(f"Invalid target path: {path!r}", path=str(path))
    if ".." in PurePosixPath(str(path).replace("\\", "/")).parts:
        raise InvalidPathError(f"Path traversal detected: {path}", path=str(path))

    target = Path(path)
    if not target.is_file():
        raise FileOperationError(f"File not found - {path}", file_path=str(path), operation="validate")
    return target


def read_target(path: Union[str, Path]) -> bytearray:
    """Read the whole file into a mutable buffer."""
    try:
        with open(path, 'rb') as f:
            data = bytearray(f.read())
    except OSError as e:
        raise FileOperationError(f"Cannot read {path}: {e.strerror or e}", file_path=str(path),
                                 operation="read") from e
    logger.debug(f"Read {len(data)} bytes from {path}")
    return data


def write_target(path: Union[str, Path], data: Union[bytes, bytearray]) -> None:
    """Write ``data`` over ``path``.

    The bytes go to a temporary file in the same directory first and replace
    the target in one step, so a failed write leaves the original intact.
    File permissions of the original are carried over. Symlinks are resolved
    first so the link target is rewritten and the link itself survives. A
    file with several hard links is overwritten in place to keep the links.
    """
    target = Path(path).resolve()
    tmp_name = None
    try:
        if target.is_file() and target.stat().st_nlink > 1:
            with open(target, 'r+b') as f:
                f.write(data)
                f.truncate()
            logger.debug(f"Wrote {len(data)} bytes in place to {path}")
            return
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        try:
            shutil.copymode(target, tmp_name)
        except OSError:
            logger.debug(f"Could not copy file mode onto {tmp_name}")
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise FileOperationError(f"Cannot write {path}: {e.strerror or e}", file_path=str(path),
                                 operation="write") from e
    logger.debug(f"Wrote {len(data)} bytes to {path}")


def backup_path_for(path: Union[str, Path], suffix: str = DEFAULT_BACKUP_SUFFIX) -> Path:
    """``firmware.bin`` -> ``firmware.bin.BAK``"""
    target = Path(path)
    return target.with_name(target.name + suffix)


def create_backup(path: Union[str, Path], suffix: str = DEFAULT_BACKUP_SUFFIX) -> Path:
    """Copy the target next to itself, overwriting an older backup."""
    source = Path(path)
    backup = backup_path_for(source, suffix)
    try:
        shutil.copy2(source, backup)
    except OSError as e:
        raise FileOperationError(f"Cannot create backup {backup}: {e.strerror or e}", file_path=str(source),
                                 operation="backup") from e

    # Verify the copy
    if backup.stat().st_size != source.stat().st_size:
        raise FileOperationError(f"Backup size mismatch: {backup}", file_path=str(source), operation="backup")

    logger.info(f"Backup created: {source} -> {backup}")
    return backup
