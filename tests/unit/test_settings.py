from pathlib import Path

from src.config.settings import Settings
from src.services.data_loader import load_row_store


def test_default_dataset_ships_with_project(monkeypatch):
    monkeypatch.delenv("MHVIZ_DATASET_PATH", raising=False)
    path = Path(Settings().dataset_path)
    assert path.is_file()
    assert len(load_row_store(path)) > 0


def test_dataset_path_from_environment(monkeypatch, tmp_path):
    target = tmp_path / "survey.csv"
    monkeypatch.setenv("MHVIZ_DATASET_PATH", str(target))
    assert Settings().dataset_path == str(target)
