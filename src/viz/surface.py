from __future__ import annotations

from typing import Any, Dict, List, Optional

import altair as alt

from src.schemas.charts import Transition, Viewport
from src.viz.theme import TITLE_FONT


class DrawingSurface:
    """Layered Vega-Lite canvas owned by exactly one chart controller.

    Layers are kept by name so a controller can replace some of them (pie slices,
    parallel lines) while the others stay exactly as drawn.
    """

    def __init__(self, surface_id: str) -> None:
        self.surface_id = surface_id
        self.viewport: Optional[Viewport] = None
        self.title: Optional[str] = None
        self.transitions: List[Transition] = []
        self._layers: Dict[str, alt.Chart] = {}
        self.redraws = 0

    @property
    def is_empty(self) -> bool:
        return not self._layers

    @property
    def layer_names(self) -> List[str]:
        return list(self._layers)

    def clear(self, viewport: Viewport, title: Optional[str] = None) -> None:
        self._layers = {}
        self.transitions = []
        self.viewport = viewport
        self.title = title
        self.redraws += 1

    def draw(self, name: str, chart: alt.Chart) -> None:
        self._layers[name] = chart

    def layer(self, name: str) -> alt.Chart:
        return self._layers[name]

    def to_spec(self, **usermeta: Any) -> Dict[str, Any]:
        if self.is_empty or self.viewport is None:
            raise RuntimeError(f"Surface {self.surface_id!r} has not been drawn yet")
        composed = alt.layer(*self._layers.values()).properties(
            width=self.viewport.width,
            height=self.viewport.height,
        )
        if self.title:
            composed = composed.properties(title=alt.TitleParams(self.title, **TITLE_FONT))
        if usermeta:
            composed = composed.properties(usermeta=usermeta)
        return composed.to_dict()
