from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure() -> None:
    """Ensure pytest base temp directory exists for CI runs."""

    base_temp = ROOT / "temp" / "pytest"
    base_temp.mkdir(parents=True, exist_ok=True)


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch):
    """Drop handlers installed by the CLI so they never write to a closed capture stream."""
    from qatch.logging_config import cleanup_logging

    monkeypatch.delenv("QATCH_CONFIG", raising=False)
    monkeypatch.delenv("QATCH_LOG_JSON", raising=False)
    yield
    cleanup_logging()


@pytest.fixture
def target_file(tmp_path):
    """Small binary file with two hits of 41 42."""
    path = tmp_path / "target.bin"
    path.write_bytes(bytes([0x10, 0x41, 0x42, 0x41, 0x42, 0x20]))
    return path
