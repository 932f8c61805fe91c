from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from src.config.observability import log_debug
from src.config.settings import Settings
from src.schemas.charts import ChartFrame, Viewport
from src.services.data_loader import RowStore
from src.services.selection import SelectionState
from src.viz.controls import Controls
from src.viz.surface import DrawingSurface
from src.viz.theme import apply_theme


class ChartController(ABC):
    """Owns one drawing surface and redraws it from (RowStore, SelectionState, viewport).

    To add a chart: subclass in src/viz/controllers/, implement `wire` and
    `render`, and register the key in src/viz/__init__.py.
    """

    chart_key: str = ""

    def __init__(self, store: RowStore, state: SelectionState, settings: Settings) -> None:
        self.store = store
        self.state = state
        self.settings = settings
        self.surface: Optional[DrawingSurface] = None

    @property
    def mounted(self) -> bool:
        return self.surface is not None and not self.surface.is_empty

    @property
    def viewport(self) -> Viewport:
        return self.state.viewport(self.chart_key)

    def mount(self, surface: DrawingSurface, controls: Controls) -> None:
        self.surface = surface
        self.wire(controls)
        self.render()

    def on_resize(self) -> None:
        if not self.mounted:
            log_debug("resize_ignored", chart_key=self.chart_key, reason="not_mounted")
            return
        self.render()

    def frame(self) -> ChartFrame:
        if not self.mounted:
            raise RuntimeError(f"Chart {self.chart_key!r} is not mounted")
        return ChartFrame(
            chart_key=self.chart_key,
            generated_at=datetime.now(timezone.utc),
            spec=self.surface.to_spec(**self.usermeta()),
            transitions=list(self.surface.transitions),
        )

    def usermeta(self) -> Dict[str, Any]:
        return {}

    def _begin(self, title: str) -> DrawingSurface:
        """Clear the surface for a full rebuild at the current viewport."""
        apply_theme()
        self.surface.clear(self.viewport, title=title)
        return self.surface

    @abstractmethod
    def wire(self, controls: Controls) -> None:
        ...

    @abstractmethod
    def render(self) -> None:
        ...
