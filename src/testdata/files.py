from __future__ import annotations

"""Lookup of named data files under the configured test data directory."""

from os import PathLike
from pathlib import Path

from src.app.settings import settings
from src.loaders.csv_loader import CSVLoadConfig, read_data_from_csv
from src.loaders.types import Dataset


class DataFileError(RuntimeError):
    """Raised when a data file name cannot be resolved."""
    pass


def resolve_data_file(name: str | PathLike[str], base_dir: Path | None = None) -> Path:
    """Resolve a data file name relative to the test data directory."""
    candidate = Path(name)
    if candidate.is_absolute():
        return candidate
    root = (base_dir or settings.test_data_dir).resolve()
    resolved = (root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise DataFileError(f"Data file escapes the test data directory: {name}")
    return resolved


async def load_data_file(
    name: str | PathLike[str],
    base_dir: Path | None = None,
    config: CSVLoadConfig | None = None,
) -> Dataset:
    """Resolve a named CSV data file and load its rows."""
    path = resolve_data_file(name, base_dir=base_dir)
    return await read_data_from_csv(path, config or CSVLoadConfig.from_settings())
