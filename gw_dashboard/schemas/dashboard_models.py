from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime, timezone
from typing import List, Optional


class AnalyticsBaseModel(BaseModel):
    """Base configuration for immutable analytics models."""
    model_config = ConfigDict(frozen=True)  # Enforce immutability in code


class StationLatest(AnalyticsBaseModel):
    """
    One record per station code, taken from its most recent reading.
    """
    station_code: str
    name: Optional[str] = None
    latitude: float
    longitude: float
    district: str = Field(..., description="Normalized casing, e.g. 'Bankura'")
    state: str

    latest_depth: float = Field(..., description="Depth BGL (m) of the latest reading")
    latest_time: datetime
    acquisition: Optional[str] = None
    status: Optional[str] = None

    readings_count: int = Field(..., ge=1)


class DistrictSummary(AnalyticsBaseModel):
    """
    Summary statistics over the latest depth of every station in a district.
    """
    district: str
    state: str
    station_count: int = Field(..., ge=1)

    avg_depth: float
    min_depth: float
    max_depth: float

    latest_measurement_time: datetime


class StationAnomaly(AnalyticsBaseModel):
    station_code: str
    depth: float
    z_score: float = Field(..., description="Signed: positive is anomalously deep")


class GroundwaterDataBundle(AnalyticsBaseModel):
    """
    A complete aggregation run, as consumed by the dashboard screens.
    """
    stations: List[StationLatest] = Field(default_factory=list)
    district_summaries: List[DistrictSummary] = Field(default_factory=list)
    anomalies: List[StationAnomaly] = Field(default_factory=list)

    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SelectionSummary(AnalyticsBaseModel):
    """
    Side-panel figures for the current district / time-range selection.
    """
    title: str
    total_stations: int
    avg_depth: float = 0.0

    latest_data_time: Optional[datetime] = None
    earliest_data_time: Optional[datetime] = None

    acquisition_modes: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)
