from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from src.schemas.datasets import DEPRESSION, MISSING_LABEL, PARALLEL_VARIABLES
from src.schemas.records import CategoryCount, GroupedSeries, PieSlice, SubCount
from src.services.data_loader import RowStore
from src.services.validators import ensure_attribute

SEGMENT_ORDER = ("No", "Yes")


def _segment_order(present: Sequence[str]) -> List[str]:
    fixed = [s for s in SEGMENT_ORDER if s in present]
    return fixed + [s for s in present if s not in SEGMENT_ORDER]


def group_by_attribute_and_depression(store: RowStore, attribute: str) -> List[GroupedSeries]:
    """Count records per attribute value, split by depression status.

    Groups follow first-encountered order in the row sequence; segments within a
    group are stacked No first, then Yes, and absent statuses are omitted.
    Missing values were normalized to `MISSING_LABEL` at load time and form
    their own group, so the counts always add up to ``len(store)``.
    """

    ensure_attribute(attribute)
    df = store.frame[[attribute, DEPRESSION]]
    counts = df.groupby([attribute, DEPRESSION], sort=False, dropna=False).size()
    by_category: Dict[str, Dict[str, int]] = {}
    for (category, status), n in counts.items():
        by_category.setdefault(str(category), {})[str(status)] = int(n)

    series: List[GroupedSeries] = []
    for category in df[attribute].drop_duplicates():
        segments = by_category[str(category)]
        series.append(
            GroupedSeries(
                category=str(category),
                values=[
                    SubCount(sub_category=sub, count=segments[sub])
                    for sub in _segment_order(list(segments))
                ],
            )
        )
    return series


def count_by_attribute_where_depressed(store: RowStore, attribute: str) -> List[PieSlice]:
    """Count depressed records per attribute value, skipping missing values."""

    ensure_attribute(attribute)
    df = store.frame
    values = df.loc[df[DEPRESSION] == "Yes", attribute]
    values = values[values != MISSING_LABEL]
    counts = values.value_counts()
    return [PieSlice(key=str(key), count=int(counts[key])) for key in values.drop_duplicates()]


def parallel_frame(store: RowStore, variables: Sequence[str]) -> pd.DataFrame:
    """Project each record onto the plotted variables, depression always last."""

    for variable in variables:
        if variable not in PARALLEL_VARIABLES:
            raise KeyError(f"Unsupported parallel variable: {variable!r}")
    columns = [v for v in PARALLEL_VARIABLES if v in variables] + [DEPRESSION]
    frame = store.frame[columns].copy()
    frame.insert(0, "record_id", range(len(frame.index)))
    return frame


def category_totals(series: Sequence[GroupedSeries]) -> List[CategoryCount]:
    return [CategoryCount(category=group.category, count=group.total) for group in series]
