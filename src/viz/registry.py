from typing import Dict, Optional, Type

from src.viz.base import ChartController


class ChartRegistry:
    """Chart keys in page order, each bound to exactly one controller class."""

    def __init__(self) -> None:
        self._controllers: Dict[str, Type[ChartController]] = {}

    def register(self, controller: Type[ChartController]) -> None:
        key = controller.chart_key
        if not key:
            raise ValueError(f"{controller.__name__} has no chart_key")
        if key in self._controllers:
            raise ValueError(f"Chart key {key!r} is already registered to {self._controllers[key].__name__}")
        self._controllers[key] = controller

    def get(self, key: str) -> Optional[Type[ChartController]]:
        return self._controllers.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._controllers

    def list_keys(self) -> list[str]:
        return list(self._controllers.keys())


registry = ChartRegistry()
