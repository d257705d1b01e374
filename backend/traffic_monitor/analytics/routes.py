"""
API routes for the vehicle dashboard.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from traffic_monitor.models import VehicleDetectionRecord

from .aggregator import Aggregator
from .schemas import HourlyAverage, Summary, VehicleSpeed, VehicleTypeCount, WeatherSpeed

router = APIRouter(prefix="/api/vehicles", tags=["vehicles"])


def get_aggregator(request: Request) -> Aggregator:
    """Aggregator created at startup and kept on the application state."""
    return request.app.state.aggregator


@router.get("/sample", response_model=List[VehicleDetectionRecord])
async def get_sample(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    aggregator: Aggregator = Depends(get_aggregator),
):
    """Get the most recent raw records."""
    return await aggregator.sample(limit=limit)


@router.get("/summary", response_model=Summary)
async def get_summary(aggregator: Aggregator = Depends(get_aggregator)):
    """Get summary statistics."""
    return await aggregator.summary()


@router.get("/hourly-average", response_model=List[HourlyAverage])
async def get_hourly_average(aggregator: Aggregator = Depends(get_aggregator)):
    """Get traffic volume and average speed by hour of day."""
    return await aggregator.hourly_average()


@router.get("/vehicle-types", response_model=List[VehicleTypeCount])
async def get_vehicle_types(aggregator: Aggregator = Depends(get_aggregator)):
    """Get vehicle type distribution."""
    return await aggregator.vehicle_type_distribution()


@router.get("/speed-by-vehicle", response_model=List[VehicleSpeed])
async def get_speed_by_vehicle(aggregator: Aggregator = Depends(get_aggregator)):
    """Get average speed by vehicle type."""
    return await aggregator.speed_by_vehicle_type()


@router.get("/weather-speed", response_model=List[WeatherSpeed])
async def get_weather_speed(aggregator: Aggregator = Depends(get_aggregator)):
    """Get weather impact on vehicle speed."""
    return await aggregator.weather_speed_impact()
