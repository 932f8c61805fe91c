from typing import Any, Dict, List, Optional, Set, Tuple

import altair as alt
import pandas as pd

from src.config.observability import log_debug, log_event
from src.schemas.datasets import ATTRIBUTE_DOMAINS, MISSING_LABEL, attribute_label
from src.services.aggregation import parallel_frame
from src.services.selection import UnknownVariableError
from src.viz.base import ChartController
from src.viz.controls import Controls
from src.viz.scales import PointScale
from src.viz.theme import LINE_DIMMED, LINE_HIGHLIGHT

MARGIN = {"top": 50, "right": 50, "bottom": 100, "left": 50}
BRUSH_HALF_WIDTH = 10
TITLE = "Parallel Coordinates (Interactive) Plot: Selected Variables and Depression"

Brush = Tuple[str, Tuple[float, float]]


class ParallelCoordinatesController(ChartController):
    """One categorical axis per checked variable plus depression, one line per record.

    All geometry is computed here in pixel space, so a brush range received from
    the page can be compared directly against each record's scaled value.
    Only the most recently brushed axis decides the highlighting.
    """

    chart_key = "parallel_coordinates"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.variables: List[str] = []
        self.records = pd.DataFrame()
        self.x_scale: Optional[PointScale] = None
        self.y_scales: Dict[str, PointScale] = {}
        self.brush: Optional[Brush] = None

    def wire(self, controls: Controls) -> None:
        controls.variables.subscribe(self._on_variables_change)

    def _on_variables_change(self, _value: Any) -> None:
        self.render()

    def _axis_domain(self, variable: str, values: pd.Series) -> List[str]:
        domain = list(ATTRIBUTE_DOMAINS[variable])
        if (~values.isin(domain)).any():
            domain.append(MISSING_LABEL)
        return domain

    def _build_scales(self) -> None:
        viewport = self.viewport
        self.x_scale = PointScale(self.variables, (MARGIN["left"], viewport.width - MARGIN["right"]))
        y_range = (viewport.height - MARGIN["bottom"], MARGIN["top"])
        self.y_scales = {}
        for variable in self.variables:
            domain = self._axis_domain(variable, self.records[variable])
            self.records[variable] = self.records[variable].where(
                self.records[variable].isin(domain), MISSING_LABEL
            )
            self.y_scales[variable] = PointScale(domain, y_range)

    def scaled(self, variable: str) -> pd.Series:
        return self.records[variable].map(self.y_scales[variable].positions())

    def highlighted_ids(self) -> Set[int]:
        ids = self.records["record_id"]
        if self.brush is None:
            return {int(i) for i in ids}
        axis, (low, high) = self.brush
        y = self.scaled(axis)
        return {int(i) for i in ids[(y >= low) & (y <= high)]}

    def lines_frame(self) -> pd.DataFrame:
        highlighted = self.highlighted_ids()
        parts = []
        for index, variable in enumerate(self.variables):
            part = pd.DataFrame(
                {
                    "record_id": self.records["record_id"],
                    "variable": variable,
                    "value": self.records[variable],
                    "axis_index": index,
                    "x": self.x_scale(variable),
                    "y": self.scaled(variable),
                }
            )
            parts.append(part)
        lines = pd.concat(parts, ignore_index=True)
        lines["stroke"] = lines["record_id"].map(lambda rid: LINE_HIGHLIGHT if rid in highlighted else LINE_DIMMED)
        return lines

    def render(self) -> None:
        self.variables = self.state.plotted_variables()
        self.records = parallel_frame(self.store, self.state.selected_parallel_variables)
        self.brush = None
        self._build_scales()
        surface = self._begin(title=None)
        surface.draw("axes", self._axes())
        surface.draw("lines", self._lines())
        surface.draw("caption", self._caption())
        log_event("parallel_coordinates_rendered", variables=",".join(self.variables), lines=len(self.records))

    def on_brush(self, axis: str, selection: Optional[Tuple[float, float]]) -> Set[int]:
        if not self.mounted:
            log_debug("brush_ignored", chart_key=self.chart_key, axis=axis)
            return set()
        if axis not in self.variables:
            raise UnknownVariableError(f"Axis {axis!r} is not plotted")
        self.brush = None if selection is None else (axis, (min(selection), max(selection)))
        self.surface.draw("lines", self._lines())
        self.surface.draw("brush", self._brush_rect())
        highlighted = self.highlighted_ids()
        log_debug("brush_applied", axis=axis, selection=selection, highlighted=len(highlighted))
        return highlighted

    def usermeta(self) -> Dict[str, Any]:
        return {
            "axes": {v: self.x_scale(v) for v in self.variables} if self.x_scale else {},
            "brushHalfWidth": BRUSH_HALF_WIDTH,
        }

    def _lines(self) -> alt.Chart:
        return (
            alt.Chart(self.lines_frame())
            .mark_line(strokeWidth=0.4)
            .encode(
                x=alt.X("x:Q", scale=None, axis=None),
                y=alt.Y("y:Q", scale=None, axis=None),
                detail="record_id:N",
                order="axis_index:Q",
                color=alt.Color("stroke:N", scale=None),
            )
        )

    def _axes(self) -> alt.LayerChart:
        ticks = []
        for variable in self.variables:
            x = self.x_scale(variable)
            for value, y in self.y_scales[variable].positions().items():
                ticks.append({"variable": variable, "value": value, "x": x, "y": y})
        ticks_df = pd.DataFrame(ticks)
        top, bottom = MARGIN["top"], self.viewport.height - MARGIN["bottom"]
        spines = pd.DataFrame(
            [
                {"variable": v, "title": attribute_label(v), "x": self.x_scale(v), "y": top, "y2": bottom}
                for v in self.variables
            ]
        )

        spine = alt.Chart(spines).mark_rule(color="black").encode(
            x=alt.X("x:Q", scale=None, axis=None),
            y=alt.Y("y:Q", scale=None, axis=None),
            y2="y2:Q",
        )
        heading = alt.Chart(spines).mark_text(fontWeight="bold", dy=-20).encode(
            x=alt.X("x:Q", scale=None, axis=None),
            y=alt.Y("y:Q", scale=None, axis=None),
            text="title:N",
        )
        tick_labels = alt.Chart(ticks_df).mark_text(align="right", dx=-9, fontSize=10).encode(
            x=alt.X("x:Q", scale=None, axis=None),
            y=alt.Y("y:Q", scale=None, axis=None),
            text="value:N",
        )
        return alt.layer(spine, tick_labels, heading)

    def _caption(self) -> alt.Chart:
        viewport = self.viewport
        caption = pd.DataFrame([{"x": viewport.width / 2, "y": viewport.height - MARGIN["bottom"] + 50, "text": TITLE}])
        return alt.Chart(caption).mark_text(fontWeight="bold", fontSize=20).encode(
            x=alt.X("x:Q", scale=None, axis=None),
            y=alt.Y("y:Q", scale=None, axis=None),
            text="text:N",
        )

    def _brush_rect(self) -> alt.Chart:
        rows = []
        if self.brush is not None:
            axis, (low, high) = self.brush
            x = self.x_scale(axis)
            rows.append({"x": x - BRUSH_HALF_WIDTH, "x2": x + BRUSH_HALF_WIDTH, "y": low, "y2": high})
        rect = pd.DataFrame(rows, columns=["x", "x2", "y", "y2"])
        return alt.Chart(rect).mark_rect(color="#777", opacity=0.3, stroke="white").encode(
            x=alt.X("x:Q", scale=None, axis=None),
            x2="x2:Q",
            y=alt.Y("y:Q", scale=None, axis=None),
            y2="y2:Q",
        )

