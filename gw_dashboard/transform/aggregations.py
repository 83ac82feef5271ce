import logging
from typing import Any, Dict, Iterable, List, NamedTuple

from gw_dashboard.config.settings import DEFAULT_STATE
from gw_dashboard.schemas.dashboard_models import DistrictSummary, StationLatest
from gw_dashboard.schemas.raw_models import GroundwaterReading
from gw_dashboard.transform.cleaning import normalize_district_name

logger = logging.getLogger(__name__)


class StationLatestAggregator:
    """
    Stateful aggregator that reduces readings to one record per station,
    keeping the most recent reading. Readings are consumed one at a time.
    """
    def __init__(self, default_state: str = DEFAULT_STATE):
        self.default_state = default_state
        # Key: station_code
        # Value: {reading, time, count}
        self.groups: Dict[str, Dict[str, Any]] = {}
        self.skipped = 0

    def consume(self, reading: GroundwaterReading) -> bool:
        """
        Ingest a single reading. Returns False if it was malformed and skipped.
        """
        if not reading.is_complete:
            self.skipped += 1
            return False

        key = reading.station_code
        reading_time = reading.timestamp

        if key not in self.groups:
            self.groups[key] = {'reading': reading, 'time': reading_time, 'count': 1}
        else:
            stats = self.groups[key]
            stats['count'] += 1
            # '>=' so that on equal timestamps the last reading seen wins
            if reading_time >= stats['time']:
                stats['reading'] = reading
                stats['time'] = reading_time
        return True

    def get_results(self) -> List[StationLatest]:
        """Finalize and return stations sorted by district, then name."""
        results = []
        for station_code, stats in self.groups.items():
            latest: GroundwaterReading = stats['reading']
            results.append(StationLatest(
                station_code=station_code,
                name=latest.station_name,
                latitude=latest.latitude,
                longitude=latest.longitude,
                district=normalize_district_name(latest.district),
                state=latest.state or self.default_state,
                latest_depth=latest.data_value,
                latest_time=stats['time'],
                acquisition=latest.data_acquisition_mode,
                status=latest.station_status,
                readings_count=stats['count'],
            ))
        results.sort(key=lambda s: (s.district, s.name or "", s.station_code))
        return results


class DistrictSummaryAggregator:
    """
    Folds stations into per-district running statistics.
    The mean is kept incrementally: new_avg = (old_avg * (n - 1) + x) / n.
    """
    def __init__(self):
        # Key: normalized district
        # Value: {state, count, avg, min, max, latest_time}
        self.groups: Dict[str, Dict[str, Any]] = {}

    def consume(self, station: StationLatest):
        key = normalize_district_name(station.district)
        val = station.latest_depth

        if key not in self.groups:
            self.groups[key] = {
                'state': station.state,
                'count': 1,
                'avg': val,
                'min': val,
                'max': val,
                'latest_time': station.latest_time,
            }
        else:
            stats = self.groups[key]
            stats['count'] += 1
            n = stats['count']
            stats['avg'] = (stats['avg'] * (n - 1) + val) / n
            if val < stats['min']: stats['min'] = val
            if val > stats['max']: stats['max'] = val
            if station.latest_time > stats['latest_time']:
                stats['latest_time'] = station.latest_time

    def get_results(self) -> List[DistrictSummary]:
        results = []
        for district in sorted(self.groups):
            stats = self.groups[district]
            # Float drift in the running mean must not push it outside [min, max]
            avg = min(max(stats['avg'], stats['min']), stats['max'])
            results.append(DistrictSummary(
                district=district,
                state=stats['state'],
                station_count=stats['count'],
                avg_depth=avg,
                min_depth=stats['min'],
                max_depth=stats['max'],
                latest_measurement_time=stats['latest_time'],
            ))
        return results


class AggregateResult(NamedTuple):
    stations: List[StationLatest]
    district_summaries: List[DistrictSummary]


def build_aggregate(
    readings: Iterable[GroundwaterReading],
    default_state: str = DEFAULT_STATE,
) -> AggregateResult:
    """
    Reduces raw readings (any order, any number of source groups) to the
    latest record per station and a summary per district.

    Readings missing station code, coordinates, depth or a valid time are
    dropped silently. Empty input gives empty lists.
    """
    station_agg = StationLatestAggregator(default_state=default_state)
    for reading in readings:
        station_agg.consume(reading)
    stations = station_agg.get_results()

    if station_agg.skipped:
        logger.debug(f"Skipped {station_agg.skipped} malformed reading(s).")

    district_agg = DistrictSummaryAggregator()
    for station in stations:
        district_agg.consume(station)

    return AggregateResult(stations=stations, district_summaries=district_agg.get_results())
