from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List

Listener = Callable[[Any], None]


class SharedControl:
    """A single UI control instance with independent change listeners."""

    def __init__(self, control_id: str, value: Any) -> None:
        self.control_id = control_id
        self.value = value
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def change(self, value: Any) -> None:
        self.value = value
        for listener in list(self._listeners):
            listener(value)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


@dataclass
class Controls:
    attribute: SharedControl = field(default_factory=lambda: SharedControl("attribute-dropdown", None))
    variables: SharedControl = field(default_factory=lambda: SharedControl("variable-checkbox", None))
