from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RawBaseModel(BaseModel):
    """
    Reflects the camelCase keys of the bundled station files
    (stationCode, dataValue, dataTime, ...) while exposing snake_case fields.
    Unknown keys (agencyName, wellType, unit, ...) are ignored.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        # Station codes are sometimes exported as bare numbers
        coerce_numbers_to_str=True,
    )


class ReadingTime(RawBaseModel):
    """Broken-down sample time as exported by the station network (UTC)."""
    year: int
    month_value: int
    day_of_month: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def to_datetime(self) -> Optional[datetime]:
        try:
            return datetime(
                self.year, self.month_value, self.day_of_month,
                self.hour, self.minute, self.second,
                tzinfo=timezone.utc,
            )
        except (ValueError, OverflowError):
            return None


class GroundwaterReading(RawBaseModel):
    """
    One depth sample from a monitoring station.

    Every field is optional: malformed samples must still load so the
    aggregator can drop them instead of the loader failing.
    """
    station_code: Optional[str] = None
    station_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    district: Optional[str] = None
    state: Optional[str] = None
    data_value: Optional[float] = None  # depth below ground level (m)
    data_time: Optional[ReadingTime] = None
    data_acquisition_mode: Optional[str] = None
    station_status: Optional[str] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        if self.data_time is None:
            return None
        return self.data_time.to_datetime()

    @property
    def is_complete(self) -> bool:
        """True when the reading can take part in aggregation."""
        return (
            bool(self.station_code)
            and self.latitude is not None
            and self.longitude is not None
            and self.data_value is not None
            and self.timestamp is not None
        )
