from typing import Any, Dict

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from src.schemas.charts import (
    AttributeChange,
    BrushChange,
    LegendClick,
    SelectionSnapshot,
    VariableToggle,
    Viewport,
)
from src.schemas.errors import ErrorCode
from src.services.error_builder import error_response
from src.services.selection import UnknownVariableError
from src.services.validators import UnknownAttributeError
from src.viz.dashboard import Dashboard, UnknownChartError
from src.viz.registry import registry

router = APIRouter(tags=["charts"])


class DatasetUnavailable(Exception):
    def __init__(self, error: Dict[str, Any]):
        super().__init__(error.get("message"))
        self.error = error


def _dashboard(request: Request) -> Dashboard:
    dashboard = request.app.state.dashboard
    if dashboard is None:
        raise DatasetUnavailable(request.app.state.load_error or {})
    return dashboard


def _unavailable(exc: DatasetUnavailable) -> JSONResponse:
    return error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        code=ErrorCode.DATASET_UNAVAILABLE,
        message="Survey dataset is not loaded",
        details=[exc.error.get("message", "")] + list(exc.error.get("details") or []),
    )


def _frames(dashboard: Dashboard, *chart_keys: str) -> Dict[str, Any]:
    return {key: dashboard.frame(key).model_dump(mode="json") for key in chart_keys}


@router.get("/charts", response_model=list[str])
async def chart_keys() -> list[str]:
    return registry.list_keys()


@router.get("/charts/{chart_key}", response_model=Dict[str, Any])
async def chart_frame(chart_key: str, request: Request) -> Any:
    try:
        dashboard = _dashboard(request)
        return dashboard.frame(chart_key).model_dump(mode="json")
    except DatasetUnavailable as exc:
        return _unavailable(exc)
    except UnknownChartError as exc:
        return error_response(
            status.HTTP_404_NOT_FOUND,
            code=ErrorCode.INVALID_CHART_KEY,
            message=exc.args[0],
            supported_keys=registry.list_keys(),
        )


@router.get("/state", response_model=SelectionSnapshot)
async def selection_state(request: Request) -> Any:
    try:
        return _dashboard(request).state.snapshot()
    except DatasetUnavailable as exc:
        return _unavailable(exc)


@router.post("/controls/attribute", response_model=Dict[str, Any])
async def change_attribute(change: AttributeChange, request: Request) -> Any:
    try:
        dashboard = _dashboard(request)
        dashboard.on_attribute_change(change.attribute)
        return _frames(dashboard, "histogram", "pie_chart")
    except DatasetUnavailable as exc:
        return _unavailable(exc)
    except UnknownAttributeError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, code=ErrorCode.INVALID_ATTRIBUTE, message=exc.args[0])


@router.post("/controls/variables", response_model=Dict[str, Any])
async def toggle_variable(toggle: VariableToggle, request: Request) -> Any:
    try:
        dashboard = _dashboard(request)
        dashboard.on_variable_toggle(toggle.variable, toggle.checked)
        return _frames(dashboard, "parallel_coordinates")
    except DatasetUnavailable as exc:
        return _unavailable(exc)
    except UnknownVariableError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, code=ErrorCode.INVALID_VARIABLE, message=exc.args[0])


@router.post("/controls/legend", response_model=Dict[str, Any])
async def click_legend(click: LegendClick, request: Request) -> Any:
    try:
        dashboard = _dashboard(request)
        visible = dashboard.on_legend_click(click.key)
        return {"key": click.key, "visible": visible, **_frames(dashboard, "pie_chart")}
    except DatasetUnavailable as exc:
        return _unavailable(exc)
    except KeyError as exc:
        return error_response(status.HTTP_404_NOT_FOUND, code=ErrorCode.UNKNOWN_CATEGORY, message=exc.args[0])


@router.post("/controls/brush", response_model=Dict[str, Any])
async def brush_axis(change: BrushChange, request: Request) -> Any:
    try:
        dashboard = _dashboard(request)
        highlighted = dashboard.on_brush(change.axis, change.selection)
        return {"highlighted": sorted(highlighted), **_frames(dashboard, "parallel_coordinates")}
    except DatasetUnavailable as exc:
        return _unavailable(exc)
    except UnknownVariableError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, code=ErrorCode.INVALID_VARIABLE, message=exc.args[0])


@router.post("/viewport/{chart_key}", status_code=status.HTTP_202_ACCEPTED)
async def viewport_change(chart_key: str, viewport: Viewport, request: Request) -> Any:
    try:
        _dashboard(request).on_viewport_change(chart_key, viewport)
        return {"chart_key": chart_key, "pending": True}
    except DatasetUnavailable as exc:
        return _unavailable(exc)
    except UnknownChartError as exc:
        return error_response(
            status.HTTP_404_NOT_FOUND,
            code=ErrorCode.INVALID_CHART_KEY,
            message=exc.args[0],
            supported_keys=registry.list_keys(),
        )
