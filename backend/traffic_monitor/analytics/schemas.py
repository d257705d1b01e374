"""
Response shapes for the dashboard.
Field names are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _DashboardModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DateRange(_DashboardModel):
    start: datetime
    end: datetime


class Summary(_DashboardModel):
    """Collection-wide totals"""
    total: int
    avg_speed: float = Field(alias="avgSpeed")
    avg_confidence: float = Field(alias="avgConfidence")
    low_confidence_count: int = Field(alias="lowConfidenceCount")
    weather_condition_types: int = Field(alias="weatherConditionTypes")
    vehicle_types: int = Field(alias="vehicleTypes")
    date_range: Optional[DateRange] = Field(default=None, alias="dateRange")


class HourlyAverage(_DashboardModel):
    hour: int = Field(ge=0, le=23)
    count: int
    avg_speed: float = Field(alias="avgSpeed")


class VehicleTypeCount(_DashboardModel):
    name: str
    value: int


class VehicleSpeed(_DashboardModel):
    vehicle: str
    avg_speed: float = Field(alias="avgSpeed")
    count: int


class WeatherSpeed(_DashboardModel):
    weather: str
    avg_speed: float = Field(alias="avgSpeed")
    count: int
    min_speed: float = Field(alias="minSpeed")
    max_speed: float = Field(alias="maxSpeed")
