from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("E2E_TEST_DATA_DIR", str(PROJECT_ROOT / "test_data"))
os.environ.setdefault("E2E_LOG_LEVEL", "DEBUG")
os.environ["E2E_CSV_DELIMITER"] = ","
os.environ["E2E_CSV_SHAPE_POLICY"] = "pad"
os.environ.pop("E2E_FAKER_SEED", None)

from src.app.log import configure_logging

configure_logging()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    def _write(content: str | bytes, name: str = "data.csv") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _write
