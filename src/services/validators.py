from typing import Dict, Iterable, List

import pandas as pd

from src.schemas.datasets import ATTRIBUTES


class UnknownAttributeError(KeyError):
    pass


def missing_columns(df: pd.DataFrame, required: Iterable[str]) -> List[str]:
    df_norm = {str(col).strip().upper() for col in df.columns}
    missing = []
    for col in required:
        if str(col).strip().upper() not in df_norm:
            missing.append(col)
    return sorted(missing)


def match_columns(df: pd.DataFrame, mapping: Dict[str, str]) -> Dict[str, str]:
    """Map actual dataframe headers to record fields, ignoring case and padding."""
    wanted = {str(raw).strip().upper(): field for raw, field in mapping.items()}
    matched: Dict[str, str] = {}
    for col in df.columns:
        field = wanted.get(str(col).strip().upper())
        if field and field not in matched.values():
            matched[col] = field
    return matched


def enforce_dimensions(df: pd.DataFrame, max_rows: int, max_columns: int) -> None:
    if len(df.index) > max_rows or len(df.columns) > max_columns:
        raise ValueError(
            f"Dataset too large: rows={len(df.index)}, cols={len(df.columns)}, "
            f"limits rows<={max_rows}, cols<={max_columns}"
        )


def ensure_attribute(attribute: str) -> str:
    if attribute not in ATTRIBUTES:
        raise UnknownAttributeError(f"Unsupported attribute: {attribute!r} (expected one of {', '.join(ATTRIBUTES)})")
    return attribute
