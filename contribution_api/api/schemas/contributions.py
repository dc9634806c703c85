from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ContributionDay(BaseModel):
    """Single parsed day from the upstream contribution calendar."""

    date: date
    count: int = Field(ge=0)
    level: int = Field(ge=0, le=4)


class ContributionResponse(BaseModel):
    """Contribution calendar payload for one GitHub user."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    total: int = Field(ge=0)
    days: list[ContributionDay]
    updated_at: datetime = Field(alias="updatedAt")


class CalendarDay(ContributionDay):
    """Week-grid cell; placeholders are synthetic zero days."""

    weekday: int = Field(ge=0, le=6)
    placeholder: bool
    tooltip: str


class CalendarWeek(BaseModel):
    """Sunday-first column of exactly seven days."""

    week_start: date
    days: list[CalendarDay] = Field(min_length=7, max_length=7)


class MonthMarker(BaseModel):
    """First week column in which a month begins."""

    week_index: int
    month_label: str


class CalendarResponse(BaseModel):
    """Contribution calendar reshaped into a renderable week grid."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    total: int = Field(ge=0)
    updated_at: datetime = Field(alias="updatedAt")
    profile_url: str
    weeks: list[CalendarWeek]
    month_markers: list[MonthMarker]
    legend: list[str]


class ErrorResponse(BaseModel):
    """Error body returned for every failed contribution request."""

    error: str
