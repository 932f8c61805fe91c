from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.schemas.charts import Viewport
from src.services.data_loader import RowStore, load_row_store
from src.services.selection import SelectionState
from src.viz.dashboard import Dashboard
from src.viz.registry import registry
import src.viz  # noqa: F401 ensures charts registered

FIXTURES = Path(__file__).parent / "fixtures"
SAMPLE = FIXTURES / "mental_health_sample.csv"


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session")
def store() -> RowStore:
    return load_row_store(SAMPLE)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def state() -> SelectionState:
    viewport = Viewport(width=700, height=400)
    return SelectionState(viewports={key: viewport for key in registry.list_keys()})


@pytest.fixture()
def dashboard(store, state, clock) -> Dashboard:
    board = Dashboard(store, state=state, clock=clock)
    board.mount()
    return board


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app(SAMPLE))
