from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from src.schemas.records import Attribute


class Transition(BaseModel):
    """Enter animation attached to a drawn mark."""

    target: str = Field(..., description="Mark identifier (bar segment or slice key)")
    attribute: str = Field(..., description="Animated visual property, e.g. height or angle")
    start: float = 0.0
    duration_ms: int


class ChartFrame(BaseModel):
    chart_key: str
    generated_at: datetime
    spec: Dict[str, Any]
    transitions: List[Transition] = Field(default_factory=list)


class Viewport(BaseModel):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class AttributeChange(BaseModel):
    attribute: Attribute


class VariableToggle(BaseModel):
    variable: str
    checked: bool


class LegendClick(BaseModel):
    key: str


class BrushChange(BaseModel):
    axis: str
    selection: Optional[Tuple[float, float]] = Field(
        default=None, description="Brushed pixel range [y0, y1]; null clears the brush"
    )

    @field_validator("selection")
    @classmethod
    def _ordered(cls, value: Optional[Tuple[float, float]]) -> Optional[Tuple[float, float]]:
        if value is None:
            return value
        low, high = value
        return (min(low, high), max(low, high))


class SelectionSnapshot(BaseModel):
    selected_attribute: Attribute
    selected_parallel_variables: List[str]
    visibility: Dict[str, bool]
    viewports: Dict[str, Viewport]
