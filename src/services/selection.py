"""Selection state shared by the chart controllers.

One `SelectionState` instance is created at mount time and passed explicitly
to every controller; only the dashboard event handlers mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from src.config.settings import settings
from src.schemas.charts import SelectionSnapshot, Viewport
from src.schemas.datasets import DEFAULT_ATTRIBUTE, DEPRESSION, PARALLEL_VARIABLES
from src.services.validators import ensure_attribute


class UnknownVariableError(KeyError):
    pass


@dataclass
class VisibilityState:
    """Per-category pie visibility, seeded lazily to visible."""

    flags: Dict[str, bool] = field(default_factory=dict)

    def observe(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.flags.setdefault(key, True)

    def is_visible(self, key: str) -> bool:
        return self.flags.get(key, True)

    def toggle(self, key: str) -> bool:
        if key not in self.flags:
            raise KeyError(f"Category {key!r} has not been drawn yet")
        self.flags[key] = not self.flags[key]
        return self.flags[key]


@dataclass
class SelectionState:
    selected_attribute: str = DEFAULT_ATTRIBUTE
    selected_parallel_variables: List[str] = field(default_factory=lambda: list(PARALLEL_VARIABLES))
    viewports: Dict[str, Viewport] = field(default_factory=dict)
    visibility: VisibilityState = field(default_factory=VisibilityState)

    def select_attribute(self, attribute: str) -> None:
        self.selected_attribute = ensure_attribute(attribute)

    def set_variable(self, variable: str, checked: bool) -> None:
        if variable not in PARALLEL_VARIABLES:
            raise UnknownVariableError(f"Unsupported parallel variable: {variable!r}")
        chosen = set(self.selected_parallel_variables)
        if checked:
            chosen.add(variable)
        else:
            chosen.discard(variable)
        self.selected_parallel_variables = [v for v in PARALLEL_VARIABLES if v in chosen]

    def plotted_variables(self) -> List[str]:
        return [*self.selected_parallel_variables, DEPRESSION]

    def viewport(self, chart_key: str) -> Viewport:
        return self.viewports.get(
            chart_key, Viewport(width=settings.default_width, height=settings.default_height)
        )

    def resize(self, chart_key: str, viewport: Viewport) -> None:
        self.viewports[chart_key] = viewport

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(
            selected_attribute=self.selected_attribute,
            selected_parallel_variables=list(self.selected_parallel_variables),
            visibility=dict(self.visibility.flags),
            viewports={key: self.viewport(key) for key in self.viewports},
        )
