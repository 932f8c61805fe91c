from typing import Any, List, Set

import altair as alt
import pandas as pd

from src.config.observability import log_debug, log_event
from src.schemas.charts import Transition
from src.schemas.datasets import attribute_label
from src.schemas.records import PieSlice
from src.services.aggregation import count_by_attribute_where_depressed
from src.viz.base import ChartController
from src.viz.controls import Controls
from src.viz.theme import PIE_SCHEME

LEGEND_OFFSET_X = 200
LEGEND_TOP = 150
LEGEND_ROW = 20


class PieChartController(ChartController):
    """Pie of the selected attribute among depressed students.

    Legend clicks go through `toggle` and only rebuild the slice and label
    layers. A slice that enters visibility animates from a zero-angle wedge;
    slices that stay visible are redrawn as is.
    """

    chart_key = "pie_chart"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.slices: List[PieSlice] = []
        self._drawn: Set[str] = set()

    def wire(self, controls: Controls) -> None:
        controls.attribute.subscribe(self._on_attribute_change)

    def _on_attribute_change(self, _value: Any) -> None:
        self.render()

    @property
    def radius(self) -> float:
        viewport = self.viewport
        return min(viewport.width, viewport.height) / 3

    def _color(self) -> alt.Scale:
        return alt.Scale(domain=[s.key for s in self.slices], scheme=PIE_SCHEME)

    def visible_slices(self) -> List[PieSlice]:
        return [s for s in self.slices if self.state.visibility.is_visible(s.key)]

    def slices_frame(self) -> pd.DataFrame:
        visible = self.visible_slices()
        total = sum(s.count for s in visible)
        rows = []
        for order, piece in enumerate(visible):
            percentage = round(piece.count / total * 100, 1) if total else 0.0
            rows.append(
                {
                    "key": piece.key,
                    "count": piece.count,
                    "percentage": percentage,
                    "order": order,
                    "tooltip": f"{piece.key}: {piece.count} ({percentage:.1f}%)",
                }
            )
        return pd.DataFrame(rows, columns=["key", "count", "percentage", "order", "tooltip"])

    def tooltip_for(self, key: str) -> str:
        frame = self.slices_frame()
        match = frame[frame["key"] == key]
        if match.empty:
            raise KeyError(f"Slice {key!r} is not visible")
        return str(match["tooltip"].iloc[0])

    def render(self) -> None:
        attribute = self.state.selected_attribute
        self.slices = count_by_attribute_where_depressed(self.store, attribute)
        self.state.visibility.observe(s.key for s in self.slices)
        surface = self._begin(f"{attribute_label(attribute)} Distribution")
        self._drawn = set()
        self.update_slices()
        surface.draw("legend", self._legend())
        log_event("pie_chart_rendered", attribute=attribute, slices=len(self.slices))

    def update_slices(self) -> None:
        frame = self.slices_frame()
        base = alt.Chart(frame).encode(
            theta=alt.Theta("count:Q", stack=True),
            order=alt.Order("order:Q"),
            color=alt.Color("key:N", scale=self._color(), legend=None),
        )
        # Text is "<key>: <count> (<pct>%)", computed against the visible slices
        arcs = base.mark_arc(outerRadius=self.radius, stroke="black", strokeWidth=1).encode(
            tooltip=alt.Tooltip("tooltip:N")
        )
        labels = base.mark_text(radius=self.radius / 2, fontSize=12, color="black").encode(text="key:N")
        self.surface.draw("slices", arcs)
        self.surface.draw("labels", labels)

        visible = list(frame["key"])
        entering = [key for key in visible if key not in self._drawn]
        self.surface.transitions = [
            Transition(target=key, attribute="angle", start=0, duration_ms=self.settings.pie_transition_ms)
            for key in entering
        ]
        self._drawn = set(visible)

    def _legend(self) -> alt.LayerChart:
        viewport = self.viewport
        entries = pd.DataFrame(
            {
                "key": [s.key for s in self.slices],
                "x": viewport.width - LEGEND_OFFSET_X,
                "y": [LEGEND_TOP + i * LEGEND_ROW for i in range(len(self.slices))],
            }
        )
        base = alt.Chart(entries).encode(
            x=alt.X("x:Q", scale=None, axis=None),
            y=alt.Y("y:Q", scale=None, axis=None),
        )
        swatches = base.mark_square(size=300, opacity=1, cursor="pointer").encode(
            color=alt.Color("key:N", scale=self._color(), legend=None)
        )
        names = base.mark_text(align="left", dx=14, cursor="pointer").encode(text="key:N")
        return swatches + names

    def toggle(self, key: str) -> bool:
        if not self.mounted:
            log_debug("legend_click_ignored", chart_key=self.chart_key, key=key)
            return False
        if key not in {s.key for s in self.slices}:
            raise KeyError(f"Category {key!r} is not part of the current pie")
        visible = self.state.visibility.toggle(key)
        self.update_slices()
        log_event("pie_slice_toggled", key=key, visible=visible)
        return visible
