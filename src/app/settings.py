from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

try:
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - optional in minimal setups
    load_dotenv = None

if load_dotenv is not None:
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    log_level_raw: str = os.getenv("E2E_LOG_LEVEL", "INFO")
    test_data_dir_raw: str = os.getenv("E2E_TEST_DATA_DIR", "test_data")
    csv_delimiter_raw: str = os.getenv("E2E_CSV_DELIMITER", ",")
    csv_encoding_raw: str = os.getenv("E2E_CSV_ENCODING", "utf-8-sig")
    csv_shape_policy_raw: str = os.getenv("E2E_CSV_SHAPE_POLICY", "pad")
    faker_locale_raw: str = os.getenv("E2E_FAKER_LOCALE", "en_US")
    faker_seed_raw: str = os.getenv("E2E_FAKER_SEED", "")

    @property
    def log_level(self) -> str:
        return os.getenv("E2E_LOG_LEVEL", self.log_level_raw)

    @property
    def test_data_dir(self) -> Path:
        raw = os.getenv("E2E_TEST_DATA_DIR", self.test_data_dir_raw).strip()
        return Path(raw or "test_data")

    @property
    def csv_delimiter(self) -> str:
        raw = os.getenv("E2E_CSV_DELIMITER", self.csv_delimiter_raw)
        if raw in {"\\t", "tab"}:
            return "\t"
        return raw or ","

    @property
    def csv_encoding(self) -> str:
        return os.getenv("E2E_CSV_ENCODING", self.csv_encoding_raw).strip() or "utf-8-sig"

    @property
    def csv_shape_policy(self) -> str:
        return os.getenv("E2E_CSV_SHAPE_POLICY", self.csv_shape_policy_raw).strip().lower() or "pad"

    @property
    def faker_locale(self) -> str:
        return os.getenv("E2E_FAKER_LOCALE", self.faker_locale_raw).strip() or "en_US"

    @property
    def faker_seed(self) -> int | None:
        raw = os.getenv("E2E_FAKER_SEED", self.faker_seed_raw).strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            return None


settings = Settings()
