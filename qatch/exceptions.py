#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Qatch - Exception Classes

All exception classes used by the patcher live here. Pattern and pair errors
are never raised by the patch engine itself; they travel inside Err results
and PatternResult records. The caller layer (CLI, file operations, config)
raises the remaining ones.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Pattern parsing errors
# =====================================================================================================

class PatternError(BaseError):
    """Base class for errors raised while parsing a hex pattern string."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 pattern: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        pattern_details = details or {}
        if pattern is not None:
            pattern_details['pattern'] = pattern
        super().__init__(message, error_code or "PATTERN_ERROR", pattern_details)


class OddLengthError(PatternError):
    """Cleaned pattern has an odd number of characters."""

    def __init__(self, pattern: Optional[str] = None, length: int = 0):
        super().__init__(
            f"Odd number of hex characters ({length})",
            "ODD_LENGTH",
            pattern,
            {'length': length},
        )


class InvalidHexPairError(PatternError):
    """A two-character slot is neither a hex byte nor exactly '??'."""

    def __init__(self, pair: str, pattern: Optional[str] = None):
        super().__init__(f"Invalid hex pair: {pair!r}", "INVALID_HEX_PAIR", pattern, {'pair': pair})
        self.pair = pair


class TooShortError(PatternError):
    """Parsed pattern has fewer slots than the minimum pattern length."""

    def __init__(self, pattern: Optional[str] = None, length: int = 0, minimum: int = 2):
        super().__init__(
            f"Pattern too short: {length} byte(s), minimum is {minimum}",
            "TOO_SHORT",
            pattern,
            {'length': length, 'minimum': minimum},
        )


# =====================================================================================================
# Pattern pair errors
# =====================================================================================================

class PairValidationError(BaseError):
    """Base class for find/replace pair validation errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "PAIR_ERROR", details)


class MalformedPatternError(PairValidationError):
    """One or both sides of a pair failed to parse."""

    def __init__(self, side: str, find_error: Optional[PatternError] = None,
                 replace_error: Optional[PatternError] = None):
        details: Dict[str, Any] = {'side': side}
        if find_error is not None:
            details['find_error'] = str(find_error)
        if replace_error is not None:
            details['replace_error'] = str(replace_error)
        super().__init__(f"Malformed {side} pattern", "MALFORMED", details)
        self.side = side
        self.find_error = find_error
        self.replace_error = replace_error


class LengthMismatchError(PairValidationError):
    """Find and replace patterns parsed to different slot counts."""

    def __init__(self, find_len: int, replace_len: int):
        super().__init__(
            f"Pattern length mismatch: {find_len} vs {replace_len}",
            "LENGTH_MISMATCH",
            {'find_len': find_len, 'replace_len': replace_len},
        )
        self.find_len = find_len
        self.replace_len = replace_len


# =====================================================================================================
# Safety -related errors
# =====================================================================================================

class SecurityError(BaseError):
    """Base class for security-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "SECURITY_ERROR", details)


class InvalidPathError(SecurityError):
    """Raised when path validation fails."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        path_details = details or {}
        if path:
            path_details['path'] = str(path)
        super().__init__(message, "INVALID_PATH", path_details)


# =====================================================================================================
# Configuration -related errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = file_path
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if field_name:
            validation_details['field_name'] = field_name
        super().__init__(message, "VALIDATION_ERROR", file_path, validation_details)


# =====================================================================================================
# IO and data -related errors
# =====================================================================================================

class DataError(BaseError):
    """Base class for data-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code or "DATA_ERROR", details)


class FileOperationError(DataError):
    """Raised when file operation errors occur."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 operation: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        file_details = details or {}
        if file_path:
            file_details['file_path'] = str(file_path)
        if operation:
            file_details['operation'] = operation
        super().__init__(message, "FILE_OP_ERROR", file_details)
