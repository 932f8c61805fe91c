import csv
import io
from pathlib import Path
from typing import Iterator, Optional, Union

import pandas as pd

from src.config.observability import log_error, log_event, timed
from src.config.settings import settings
from src.schemas.datasets import COLUMN_MAP, MISSING_LABEL, RECORD_FIELDS
from src.schemas.errors import ErrorCode
from src.schemas.records import SurveyRecord
from src.services.validators import enforce_dimensions, match_columns, missing_columns


class DatasetLoadError(RuntimeError):
    def __init__(self, code: str, message: str, details: Optional[list[str]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or []


def _detect_separator(sample: str) -> str:
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=";,|\t")
        return dialect.delimiter
    except csv.Error:
        return ","


def read_bytes_to_df(data: bytes) -> pd.DataFrame:
    sep = _detect_separator(data[:1024].decode(errors="ignore"))
    df = pd.read_csv(io.BytesIO(data), sep=sep, dtype=str, keep_default_na=False)
    enforce_dimensions(df, max_rows=settings.max_rows, max_columns=settings.max_columns)
    return df


def _normalize_age(value: str) -> str:
    try:
        number = float(value)
    except ValueError:
        return value
    return str(int(number)) if number.is_integer() else value


def normalize_records(raw: pd.DataFrame) -> pd.DataFrame:
    """Rename survey headers to record fields and clean cell values.

    Empty cells become `MISSING_LABEL` so every chart sees the same bucket.
    """

    renamed = raw.rename(columns=match_columns(raw, COLUMN_MAP))[RECORD_FIELDS].copy()
    for field in RECORD_FIELDS:
        renamed[field] = renamed[field].fillna("").astype(str).str.strip()
    renamed["year"] = renamed["year"].str.title()
    renamed["age"] = renamed["age"].map(_normalize_age)
    return renamed.replace("", MISSING_LABEL).reset_index(drop=True)


class RowStore:
    """Read-only sequence of survey records shared by every chart."""

    def __init__(self, frame: pd.DataFrame) -> None:
        self._frame = frame.copy()

    @property
    def frame(self) -> pd.DataFrame:
        # Callers get a copy so the loaded rows never change.
        return self._frame.copy()

    def __len__(self) -> int:
        return len(self._frame.index)

    def __iter__(self) -> Iterator[SurveyRecord]:
        for row in self._frame.to_dict(orient="records"):
            yield SurveyRecord(**row)

    @classmethod
    def from_records(cls, records: list[dict]) -> "RowStore":
        frame = pd.DataFrame(records, columns=RECORD_FIELDS).fillna("")
        for field in RECORD_FIELDS:
            frame[field] = frame[field].astype(str).str.strip()
        return cls(frame.replace("", MISSING_LABEL))


def load_row_store(path: Union[str, Path]) -> RowStore:
    target = Path(path)
    with timed("load_dataset"):
        try:
            data = target.read_bytes()
        except OSError as exc:
            log_error("dataset_unreachable", str(exc), path=target)
            raise DatasetLoadError(
                code=ErrorCode.DATASET_UNAVAILABLE, message="Dataset could not be read", details=[str(exc)]
            ) from exc
        try:
            raw = read_bytes_to_df(data)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            log_error("dataset_unparseable", str(exc), path=target)
            raise DatasetLoadError(
                code=ErrorCode.DATASET_UNAVAILABLE, message="Dataset could not be parsed", details=[str(exc)]
            ) from exc
        except ValueError as exc:
            raise DatasetLoadError(
                code=ErrorCode.DATASET_TOO_LARGE, message="Dataset too large", details=[str(exc)]
            ) from exc

    missing = missing_columns(raw, COLUMN_MAP)
    if missing:
        raise DatasetLoadError(
            code=ErrorCode.MISSING_REQUIRED_COLUMNS,
            message="Missing required survey columns",
            details=missing,
        )

    store = RowStore(normalize_records(raw))
    log_event("dataset_loaded", path=target, rows=len(store))
    return store
