from typing import Any, Dict, Iterable, List

import altair as alt
import pandas as pd

from src.config.observability import log_event
from src.schemas.charts import Transition
from src.schemas.datasets import MISSING_LABEL, attribute_label
from src.schemas.records import GroupedSeries
from src.services.aggregation import category_totals, group_by_attribute_and_depression
from src.viz.base import ChartController
from src.viz.controls import Controls
from src.viz.theme import DEPRESSION_COLORS, DEPRESSION_LEGEND, MISSING_COLOR


def segment_colors(statuses: Iterable[str]) -> Dict[str, str]:
    """Colour per depression status, with a neutral swatch only when a status is missing."""
    colors = dict(DEPRESSION_COLORS)
    if MISSING_LABEL in set(statuses):
        colors[MISSING_LABEL] = MISSING_COLOR
    return colors


def legend_label_expr() -> str:
    expr = "datum.label"
    for status, text in DEPRESSION_LEGEND.items():
        expr = f"datum.label == '{status}' ? '{text}' : {expr}"
    return expr


class HistogramController(ChartController):
    """Stacked bars of the selected attribute, split by depression status.

    One bar group per attribute value (encounter order), segments stacked No
    then Yes. Every redraw clears the surface and rebuilds all layers.
    """

    chart_key = "histogram"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.series: List[GroupedSeries] = []

    def wire(self, controls: Controls) -> None:
        controls.attribute.subscribe(self._on_attribute_change)

    def _on_attribute_change(self, _value: Any) -> None:
        self.render()

    def bars_frame(self) -> pd.DataFrame:
        rows = []
        for group in self.series:
            cumulative = 0
            for segment in group.values:
                rows.append(
                    {
                        "category": group.category,
                        "sub_category": segment.sub_category,
                        "status": DEPRESSION_LEGEND.get(segment.sub_category, segment.sub_category),
                        "count": segment.count,
                        "y0": cumulative,
                        "y1": cumulative + segment.count,
                    }
                )
                cumulative += segment.count
        return pd.DataFrame(rows, columns=["category", "sub_category", "status", "count", "y0", "y1"])

    def render(self) -> None:
        attribute = self.state.selected_attribute
        label = attribute_label(attribute)
        self.series = group_by_attribute_and_depression(self.store, attribute)
        surface = self._begin(f"Distribution of {label} Among Students")

        bars = self.bars_frame()
        categories = [group.category for group in self.series]
        y_max = max((total.count for total in category_totals(self.series)), default=0)
        colors = segment_colors(bars["sub_category"])

        chart = (
            alt.Chart(bars)
            .mark_bar()
            .encode(
                x=alt.X(
                    "category:N",
                    sort=categories,
                    title=label,
                    scale=alt.Scale(paddingInner=0.2, paddingOuter=0.2),
                    axis=alt.Axis(labelAngle=0),
                ),
                y=alt.Y("y1:Q", title="Frequency", scale=alt.Scale(domain=[0, max(y_max, 1)])),
                y2="y0:Q",
                color=alt.Color(
                    "sub_category:N",
                    scale=alt.Scale(domain=list(colors.keys()), range=list(colors.values())),
                    legend=alt.Legend(title=None, orient="top-right", labelExpr=legend_label_expr()),
                ),
                tooltip=[
                    alt.Tooltip("category:N", title=label),
                    alt.Tooltip("status:N", title="Status"),
                    alt.Tooltip("count:Q", title="Count"),
                ],
            )
        )
        surface.draw("bars", chart)
        surface.transitions = [
            Transition(
                target=f"{row.category}/{row.sub_category}",
                attribute="height",
                start=0,
                duration_ms=self.settings.histogram_transition_ms,
            )
            for row in bars.itertuples(index=False)
        ]
        log_event("histogram_rendered", attribute=attribute, groups=len(self.series))
