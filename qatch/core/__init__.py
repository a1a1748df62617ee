"""Filesystem side of the patcher."""

from .file_utils import (
    DEFAULT_BACKUP_SUFFIX,
    backup_path_for,
    create_backup,
    read_target,
    validate_target,
    write_target,
)

__all__ = [
    "DEFAULT_BACKUP_SUFFIX",
    "backup_path_for",
    "create_backup",
    "read_target",
    "validate_target",
    "write_target",
]
