from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorCode:
    INVALID_CHART_KEY = "invalid_chart_key"
    INVALID_ATTRIBUTE = "invalid_attribute"
    INVALID_VARIABLE = "invalid_variable"
    UNKNOWN_CATEGORY = "unknown_category"
    MISSING_REQUIRED_COLUMNS = "missing_required_columns"
    DATASET_TOO_LARGE = "dataset_too_large"
    DATASET_UNAVAILABLE = "dataset_unavailable"


class ErrorResponse(BaseModel):
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable description")
    details: Optional[List[str]] = Field(default=None, description="Specific field issues")
    supported_chart_keys: Optional[List[str]] = Field(
        default=None, description="Available chart keys when invalid chart key provided"
    )
