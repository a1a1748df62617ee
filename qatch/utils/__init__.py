"""Shared helpers."""

from .result import Ok, Err, Result, is_ok, is_err, unwrap, error_of

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err", "unwrap", "error_of"]
