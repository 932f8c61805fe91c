from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

Attribute = Literal["gpa", "year", "gender", "age"]
YesNo = Literal["Yes", "No"]


class SurveyRecord(BaseModel):
    """One survey respondent, immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    depression: str
    anxiety: str
    panic: str
    year: str
    gpa: str
    gender: str
    age: str


class CategoryCount(BaseModel):
    category: str
    count: int


class SubCount(BaseModel):
    sub_category: str = Field(..., description="Depression status of the segment (Yes/No)")
    count: int


class GroupedSeries(BaseModel):
    category: str
    values: List[SubCount]

    @property
    def total(self) -> int:
        return sum(v.count for v in self.values)


class PieSlice(BaseModel):
    key: str
    count: int
