from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from src.api.charts import router as charts_router
from src.config.observability import log_error
from src.config.settings import settings
from src.services.data_loader import DatasetLoadError, load_row_store
from src.services.error_builder import load_failure
from src.viz.dashboard import Dashboard
from src.viz.fragments import histogram_fragment, parallel_coordinates_fragment, pie_chart_fragment, render_page


def _parse_cors_origins(value: str) -> tuple[list[str], bool]:
    raw = (value or "").strip()
    if raw == "*":
        # Credentials are not compatible with wildcard origins.
        return ["*"], False
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins, True


def create_app(dataset_path: Optional[Union[str, Path]] = None) -> FastAPI:
    app = FastAPI(title="Student Mental Health Charts")

    origins, allow_credentials = _parse_cors_origins(settings.cors_allow_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # The dataset must be fully loaded before any chart mounts.
    app.state.dashboard = None
    app.state.load_error = None
    try:
        store = load_row_store(dataset_path or settings.dataset_path)
    except DatasetLoadError as exc:
        log_error("dataset_load_failed", exc.message, code=exc.code)
        app.state.load_error = load_failure(exc)
    else:
        dashboard = Dashboard(store)
        dashboard.mount()
        app.state.dashboard = dashboard

    app.include_router(charts_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok" if app.state.dashboard else "degraded"}

    @app.get("/", response_class=HTMLResponse, tags=["page"])
    async def page(request: Request) -> HTMLResponse:
        dashboard: Optional[Dashboard] = request.app.state.dashboard
        if dashboard is None:
            return HTMLResponse(render_page([], error=request.app.state.load_error), status_code=503)
        fragments = [
            histogram_fragment(dashboard.state),
            pie_chart_fragment(dashboard.state),
            parallel_coordinates_fragment(dashboard.state),
        ]
        return HTMLResponse(render_page(fragments, charts=list(dashboard.charts)))

    return app


app = create_app()
