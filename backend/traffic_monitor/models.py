"""
Data models for the Traffic Monitor backend.
Defines the persisted vehicles table and the immutable detection record.
"""
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy import String, Float, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from traffic_monitor.database import Base
from traffic_monitor.exceptions import RecordValidationError


class VehicleModel(Base):
    """One vehicle detection as stored by the ingestion process."""
    __tablename__ = "vehicles"

    # Autoincrement id doubles as insertion order
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehicle_type: Mapped[str] = mapped_column(String(50), nullable=False)
    detection_confidence: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    speed: Mapped[float] = mapped_column(Float, nullable=False)
    weather_condition: Mapped[str] = mapped_column(String(50), nullable=False)


def to_utc(value: datetime) -> datetime:
    # Naive timestamps (SQLite round trips) are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class VehicleDetectionRecord(BaseModel):
    """Vehicle detection observation (read-only once created)"""
    model_config = ConfigDict(frozen=True)

    vehicle_type: str = Field(min_length=1)
    detection_confidence: float = Field(allow_inf_nan=False)
    timestamp: datetime
    speed: float = Field(allow_inf_nan=False)
    weather_condition: str = Field(min_length=1)

    @field_validator("vehicle_type", "weather_condition")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        # Checked stripped, stored as given
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return to_utc(value)

    @classmethod
    def from_orm_row(cls, row: VehicleModel) -> "VehicleDetectionRecord":
        """
        Build a record from a stored row.
        Ingestion checks are not repeated; stored values are returned as-is.
        """
        return cls.model_construct(
            vehicle_type=row.vehicle_type,
            detection_confidence=row.detection_confidence,
            timestamp=to_utc(row.timestamp),
            speed=row.speed,
            weather_condition=row.weather_condition,
        )

    def to_orm(self) -> VehicleModel:
        return VehicleModel(
            vehicle_type=self.vehicle_type,
            detection_confidence=self.detection_confidence,
            timestamp=self.timestamp,
            speed=self.speed,
            weather_condition=self.weather_condition,
        )


def parse_record(data: Mapping[str, Any]) -> VehicleDetectionRecord:
    """
    Validate raw ingestion data into a record.

    Raises:
        RecordValidationError: naming the first offending field.
    """
    try:
        return VehicleDetectionRecord.model_validate(dict(data))
    except ValidationError as e:
        first = e.errors()[0]
        field_name = str(first["loc"][0]) if first.get("loc") else None
        raise RecordValidationError(
            f"Invalid vehicle record: {field_name}: {first['msg']}",
            field_name=field_name,
        ) from e
