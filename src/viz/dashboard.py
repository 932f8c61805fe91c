"""Interaction layer: routes UI events into the selection state and the charts."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Set, Tuple

from src.config.observability import log_event
from src.config.settings import Settings, settings as default_settings
from src.schemas.charts import ChartFrame, Viewport
from src.services.data_loader import RowStore
from src.services.selection import SelectionState
from src.services.viewport import ViewportSignal
from src.viz.base import ChartController
from src.viz.controllers.parallel_coordinates import ParallelCoordinatesController
from src.viz.controllers.pie_chart import PieChartController
from src.viz.controls import Controls
from src.viz.registry import registry
from src.viz.surface import DrawingSurface
import src.viz  # noqa: F401 ensures default charts registered


class UnknownChartError(KeyError):
    pass


class Dashboard:
    def __init__(
        self,
        store: RowStore,
        state: Optional[SelectionState] = None,
        settings: Settings = default_settings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.state = state or SelectionState()
        self.settings = settings
        self.controls = Controls()
        self.controls.attribute.value = self.state.selected_attribute
        self.controls.variables.value = list(self.state.selected_parallel_variables)
        self.charts: Dict[str, ChartController] = {}
        self.signals: Dict[str, ViewportSignal] = {}
        for key in registry.list_keys():
            controller_cls = registry.get(key)
            self.charts[key] = controller_cls(store, self.state, settings)
            self.signals[key] = ViewportSignal(settings.resize_debounce_ms, clock=clock)

    def mount(self) -> None:
        for key, chart in self.charts.items():
            chart.mount(DrawingSurface(f"{key}-svg"), self.controls)
        log_event("dashboard_mounted", charts=",".join(self.charts), rows=len(self.store))

    def chart(self, chart_key: str) -> ChartController:
        try:
            return self.charts[chart_key]
        except KeyError:
            raise UnknownChartError(f"Unsupported chart key: {chart_key}") from None

    @property
    def pie_chart(self) -> PieChartController:
        return self.chart(PieChartController.chart_key)

    @property
    def parallel_coordinates(self) -> ParallelCoordinatesController:
        return self.chart(ParallelCoordinatesController.chart_key)

    def frame(self, chart_key: str) -> ChartFrame:
        chart = self.chart(chart_key)
        self.flush_viewports()
        return chart.frame()

    def on_attribute_change(self, attribute: str) -> None:
        self.state.select_attribute(attribute)
        log_event("attribute_changed", attribute=attribute)
        self.controls.attribute.change(attribute)

    def on_variable_toggle(self, variable: str, checked: bool) -> None:
        self.state.set_variable(variable, checked)
        log_event("variable_toggled", variable=variable, checked=checked)
        self.controls.variables.change(list(self.state.selected_parallel_variables))

    def on_legend_click(self, key: str) -> bool:
        return self.pie_chart.toggle(key)

    def on_brush(self, axis: str, selection: Optional[Tuple[float, float]]) -> Set[int]:
        return self.parallel_coordinates.on_brush(axis, selection)

    def on_viewport_change(self, chart_key: str, viewport: Viewport) -> None:
        self.chart(chart_key)
        self.signals[chart_key].push(viewport)

    def flush_viewports(self) -> None:
        for key, signal in self.signals.items():
            viewport = signal.settle()
            if viewport is None:
                continue
            self.state.resize(key, viewport)
            self.charts[key].on_resize()
