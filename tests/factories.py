from datetime import datetime, timezone

from gw_dashboard.schemas.dashboard_models import StationLatest
from gw_dashboard.schemas.raw_models import GroundwaterReading


def make_doc(station="A", depth=5.0, hour=10, day=1, district="BANKURA", **overrides):
    """Raw document shaped like the bundled GWATERLVL files."""
    doc = {
        "stationCode": station,
        "stationName": f"Station {station}",
        "latitude": 23.2,
        "longitude": 87.1,
        "state": "West Bengal",
        "district": district,
        "dataAcquisitionMode": "Manual",
        "stationStatus": "Active",
        "dataValue": depth,
        "dataTime": {
            "year": 2023, "monthValue": 5, "month": "MAY", "dayOfMonth": day,
            "dayOfYear": 120 + day, "dayOfWeek": "MONDAY",
            "hour": hour, "minute": 0, "second": 0, "nano": 0,
        },
        "unit": "m",
        "wellType": None,
    }
    doc.update(overrides)
    return doc


def make_reading(*args, **kwargs):
    return GroundwaterReading.model_validate(make_doc(*args, **kwargs))


def make_station(code, depth, district="Bankura", day=1, acquisition=None, status=None):
    return StationLatest(
        station_code=code,
        name=f"Station {code}",
        latitude=23.2,
        longitude=87.1,
        district=district,
        state="West Bengal",
        latest_depth=depth,
        latest_time=datetime(2023, 5, day, tzinfo=timezone.utc),
        acquisition=acquisition,
        status=status,
        readings_count=1,
    )
