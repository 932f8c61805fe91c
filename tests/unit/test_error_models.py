import json

from src.schemas.errors import ErrorCode
from src.services.data_loader import DatasetLoadError
from src.services.error_builder import build_error, error_response, load_failure


def test_error_builder_structures_payload():
    payload = build_error("invalid_chart_key", "bad key", ["detail"], ["a", "b"])
    assert payload["code"] == "invalid_chart_key"
    assert payload["message"] == "bad key"
    assert payload["details"] == ["detail"]
    assert payload["supported_chart_keys"] == ["a", "b"]


def test_error_builder_defaults_details():
    payload = build_error("dataset_unavailable", "no data")
    assert payload["details"] == []
    assert payload["supported_chart_keys"] is None


def test_load_failure_keeps_code_and_details():
    exc = DatasetLoadError(ErrorCode.MISSING_REQUIRED_COLUMNS, "Missing required survey columns", ["Age"])
    payload = load_failure(exc)
    assert payload["code"] == "missing_required_columns"
    assert payload["details"] == ["Age"]


def test_error_response_wraps_envelope():
    response = error_response(404, ErrorCode.UNKNOWN_CATEGORY, "no slice")
    assert response.status_code == 404
    assert json.loads(response.body) == {
        "code": "unknown_category",
        "message": "no slice",
        "details": [],
        "supported_chart_keys": None,
    }
