import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from gw_dashboard.schemas.raw_models import GroundwaterReading

logger = logging.getLogger(__name__)

UNKNOWN_DISTRICT = "Unknown"


def normalize_district_name(name: Optional[str]) -> str:
    """
    Maps a district as written in the station files (e.g. 'BANKURA') to the
    casing used by the district shapes ('Bankura').

    Idempotent: normalizing an already normalized name returns it unchanged.
    Missing or blank names fall under UNKNOWN_DISTRICT.
    """
    if not name or not name.strip():
        return UNKNOWN_DISTRICT
    return name.strip().capitalize()


def ensure_utc(dt_input: Any) -> Optional[datetime]:
    """
    Normalizes a datetime or ISO string to an aware UTC datetime.
    Naive values are assumed to be UTC already.

    Returns:
        datetime, or None if the input is missing or unparseable.
    """
    if dt_input is None:
        return None

    if isinstance(dt_input, str):
        try:
            dt_input = datetime.fromisoformat(dt_input.replace('Z', '+00:00'))
        except ValueError:
            return None

    if isinstance(dt_input, datetime):
        if dt_input.tzinfo is None:
            return dt_input.replace(tzinfo=timezone.utc)
        return dt_input.astimezone(timezone.utc)

    return None


def parse_reading(row: Dict[str, Any]) -> Optional[GroundwaterReading]:
    """
    Validates a raw station document into a GroundwaterReading.

    Missing fields are allowed (the aggregator filters those out); only
    documents with wrongly typed values, such as a non-numeric dataValue,
    are rejected here.

    Returns:
        GroundwaterReading, or None if the document cannot be validated.
    """
    try:
        return GroundwaterReading.model_validate(row)
    except ValidationError as e:
        logger.debug(f"Rejected reading {row.get('stationCode')!r}: {e.error_count()} error(s)")
        return None
