from typing import List, Optional

from fastapi.responses import JSONResponse

from src.schemas.errors import ErrorResponse
from src.services.data_loader import DatasetLoadError


def build_error(
    code: str,
    message: str,
    details: Optional[List[str]] = None,
    supported_keys: Optional[List[str]] = None,
) -> dict:
    return ErrorResponse(
        code=code,
        message=message,
        details=details or [],
        supported_chart_keys=supported_keys,
    ).model_dump()


def load_failure(exc: DatasetLoadError) -> dict:
    """Envelope kept on the app when the survey dataset fails to load."""
    return build_error(code=exc.code, message=exc.message, details=list(exc.details))


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[List[str]] = None,
    supported_keys: Optional[List[str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_error(code, message, details=details, supported_keys=supported_keys),
    )
