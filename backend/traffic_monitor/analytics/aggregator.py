"""
Analytics aggregation for the Traffic Monitor dashboard.
Summarizes the vehicle detection collection into small chart-ready shapes.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional

from traffic_monitor.models import VehicleDetectionRecord
from traffic_monitor.store import RecordStore

from .formatting import as_percent, mean_or_zero, round1, utc_hour
from .schemas import (
    DateRange,
    HourlyAverage,
    Summary,
    VehicleSpeed,
    VehicleTypeCount,
    WeatherSpeed,
)

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_THRESHOLD = 0.7
DEFAULT_SAMPLE_LIMIT = 10


@dataclass
class SpeedBucket:
    """Running count/sum/min/max of speeds for one group."""
    count: int = 0
    total: float = 0.0
    min_speed: Optional[float] = None
    max_speed: Optional[float] = None

    def add(self, speed: float):
        self.count += 1
        self.total += speed
        if self.min_speed is None or speed < self.min_speed:
            self.min_speed = speed
        if self.max_speed is None or speed > self.max_speed:
            self.max_speed = speed

    @property
    def avg_speed(self) -> float:
        return round1(mean_or_zero(self.total, self.count))


class Aggregator:
    """
    Read-only aggregations over a record store.

    Each operation fetches once and reduces in memory; a failed fetch raises
    DataAccessError from the store and nothing is returned.
    """

    def __init__(
        self,
        store: RecordStore,
        low_confidence_threshold: float = LOW_CONFIDENCE_THRESHOLD,
        sample_limit: int = DEFAULT_SAMPLE_LIMIT,
    ):
        self.store = store
        self.low_confidence_threshold = low_confidence_threshold
        self.sample_limit = sample_limit

    async def sample(self, limit: Optional[int] = None) -> List[VehicleDetectionRecord]:
        """Most recent `limit` records (default `sample_limit`), newest first."""
        if limit is None:
            limit = self.sample_limit
        return await self.store.fetch_recent(limit)

    async def summary(self) -> Summary:
        """Totals, averages and distinct counts across the whole collection."""
        records = await self.store.fetch_all()

        speed_total = 0.0
        confidence_total = 0.0
        low_confidence = 0
        weather_conditions = set()
        vehicle_types = set()
        start = end = None

        for record in records:
            speed_total += record.speed
            confidence_total += record.detection_confidence
            if record.detection_confidence < self.low_confidence_threshold:
                low_confidence += 1
            weather_conditions.add(record.weather_condition)
            vehicle_types.add(record.vehicle_type)
            if start is None or record.timestamp < start:
                start = record.timestamp
            if end is None or record.timestamp > end:
                end = record.timestamp

        total = len(records)
        logger.debug("Summary computed over %d records", total)

        return Summary(
            total=total,
            avg_speed=round1(mean_or_zero(speed_total, total)),
            avg_confidence=round1(as_percent(mean_or_zero(confidence_total, total))),
            low_confidence_count=low_confidence,
            weather_condition_types=len(weather_conditions),
            vehicle_types=len(vehicle_types),
            date_range=DateRange(start=start, end=end) if total else None,
        )

    async def hourly_average(self) -> List[HourlyAverage]:
        """Count and mean speed per UTC hour of day, all dates folded together."""
        records = await self.store.fetch_all()

        buckets: Dict[int, SpeedBucket] = defaultdict(SpeedBucket)
        for record in records:
            buckets[utc_hour(record.timestamp)].add(record.speed)

        # Hours without records are omitted
        return [
            HourlyAverage(hour=hour, count=bucket.count, avg_speed=bucket.avg_speed)
            for hour, bucket in sorted(buckets.items())
        ]

    async def vehicle_type_distribution(self) -> List[VehicleTypeCount]:
        """Record count per vehicle type, in first-seen order."""
        records = await self.store.fetch_all()

        counts: Dict[str, int] = defaultdict(int)
        for record in records:
            counts[record.vehicle_type] += 1

        return [VehicleTypeCount(name=name, value=value) for name, value in counts.items()]

    async def speed_by_vehicle_type(self) -> List[VehicleSpeed]:
        """Mean speed per vehicle type, sorted by type label."""
        records = await self.store.fetch_all()

        buckets: Dict[str, SpeedBucket] = defaultdict(SpeedBucket)
        for record in records:
            buckets[record.vehicle_type].add(record.speed)

        return [
            VehicleSpeed(vehicle=vehicle, avg_speed=bucket.avg_speed, count=bucket.count)
            for vehicle, bucket in sorted(buckets.items())
        ]

    async def weather_speed_impact(self) -> List[WeatherSpeed]:
        """Speed statistics per weather condition, fastest average first."""
        records = await self.store.fetch_all()

        buckets: Dict[str, SpeedBucket] = defaultdict(SpeedBucket)
        for record in records:
            buckets[record.weather_condition].add(record.speed)

        results = [
            WeatherSpeed(
                weather=weather,
                avg_speed=bucket.avg_speed,
                count=bucket.count,
                min_speed=round1(bucket.min_speed),
                max_speed=round1(bucket.max_speed),
            )
            for weather, bucket in buckets.items()
        ]
        # Ties on the rounded average fall back to the weather label
        results.sort(key=lambda row: (-row.avg_speed, row.weather))
        return results
