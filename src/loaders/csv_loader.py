from __future__ import annotations

"""Streaming CSV loader producing ordered row records for data-driven tests."""

import csv
import logging
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any, AsyncGenerator

import anyio
import anyio.to_thread

from src.app.settings import settings
from src.loaders.types import SHAPE_POLICIES, Dataset, RowRecord, ShapePolicy

logger = logging.getLogger(__name__)


class CSVLoaderError(RuntimeError):
    """Raised when CSV loading fails."""

    def __init__(self, message: str, path: str | PathLike[str] | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class CSVAccessError(CSVLoaderError):
    """Raised when the CSV file cannot be opened or read."""
    pass


class CSVDecodeError(CSVLoaderError):
    """Raised when the file content is not valid delimited text."""

    def __init__(
        self,
        message: str,
        path: str | PathLike[str] | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message, path)
        self.line_number = line_number


class CSVShapeError(CSVDecodeError):
    """Raised under the strict shape policy when a row and the header disagree."""
    pass


@dataclass(frozen=True)
class CSVLoadConfig:
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    shape_policy: ShapePolicy = "pad"
    batch_size: int = 256

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        if self.shape_policy not in SHAPE_POLICIES:
            raise ValueError(f"Unknown shape policy: {self.shape_policy}")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")

    @classmethod
    def from_settings(cls) -> CSVLoadConfig:
        return cls(
            delimiter=settings.csv_delimiter,
            encoding=settings.csv_encoding,
            shape_policy=settings.csv_shape_policy,  # type: ignore[arg-type]
        )


async def read_data_from_csv(
    path: str | PathLike[str],
    config: CSVLoadConfig | None = None,
) -> Dataset:
    """Load every data row of a CSV file, in file order.

    The first non-blank record is the header and supplies the keys of every
    returned row. Cell values are kept as strings. A header-only or empty
    file yields an empty list. Any access or decode failure raises and no
    partial result is returned.
    """
    rows: Dataset = []
    async for row in iter_csv_rows(path, config):
        rows.append(row)
    logger.info("csv_loaded path=%s rows=%s", path, len(rows))
    return rows


async def iter_csv_rows(
    path: str | PathLike[str],
    config: CSVLoadConfig | None = None,
) -> AsyncGenerator[RowRecord, None]:
    """Yield row records one at a time while the file is being read.

    Reads run in a worker thread in batches of ``config.batch_size`` records,
    so the event loop is never blocked and memory stays bounded by the batch.
    The file handle is closed on exhaustion, on error and on cancellation.
    """
    config = config or CSVLoadConfig.from_settings()
    file_path = Path(path)
    try:
        handle = await anyio.open_file(file_path, "r", encoding=config.encoding, newline="")
    except LookupError as exc:
        raise CSVDecodeError(f"Unknown encoding: {config.encoding}", file_path) from exc
    except OSError as exc:
        raise CSVAccessError(f"Cannot open CSV file {file_path}: {exc.strerror or exc}", file_path) from exc

    try:
        reader = csv.reader(handle.wrapped, delimiter=config.delimiter, strict=True)
        header: list[str] | None = None
        while True:
            batch = await anyio.to_thread.run_sync(_read_batch, reader, config.batch_size, file_path)
            if not batch:
                break
            for line_number, fields in batch:
                if header is None:
                    header = _parse_header(fields, file_path, line_number)
                    continue
                yield _to_record(header, fields, config.shape_policy, file_path, line_number)
    finally:
        # aclose() checkpoints, so it must run shielded inside a cancelled scope
        with anyio.CancelScope(shield=True):
            await handle.aclose()


def _read_batch(reader: Any, batch_size: int, path: Path) -> list[tuple[int, list[str]]]:
    batch: list[tuple[int, list[str]]] = []
    while len(batch) < batch_size:
        start_line = reader.line_num + 1
        try:
            fields = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            raise CSVDecodeError(
                f"Malformed CSV at line {reader.line_num}: {exc}", path, reader.line_num
            ) from exc
        except UnicodeDecodeError as exc:
            raise CSVDecodeError(f"Invalid text encoding: {exc.reason}", path) from exc
        except OSError as exc:
            raise CSVAccessError(f"Cannot read CSV file {path}: {exc.strerror or exc}", path) from exc
        if not fields:
            continue
        batch.append((start_line, fields))
    return batch


def _parse_header(fields: list[str], path: Path, line_number: int) -> list[str]:
    header = [name.strip() for name in fields]
    if any(not name for name in header):
        raise CSVDecodeError("Header contains an empty column name", path, line_number)
    seen: set[str] = set()
    for name in header:
        if name in seen:
            raise CSVDecodeError(f"Duplicate column name in header: {name}", path, line_number)
        seen.add(name)
    return header


def _to_record(
    header: list[str],
    fields: list[str],
    shape_policy: ShapePolicy,
    path: Path,
    line_number: int,
) -> RowRecord:
    expected = len(header)
    actual = len(fields)
    if actual != expected:
        if shape_policy == "strict":
            raise CSVShapeError(
                f"Line {line_number} has {actual} fields, header has {expected}",
                path,
                line_number,
            )
        logger.warning(
            "csv_row_shape_mismatch path=%s line=%s fields=%s expected=%s",
            path,
            line_number,
            actual,
            expected,
        )
        if actual < expected:
            fields = fields + [""] * (expected - actual)
        else:
            fields = fields[:expected]
    return dict(zip(header, fields))
