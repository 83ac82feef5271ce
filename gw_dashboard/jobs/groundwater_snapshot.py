import logging
from pathlib import Path
from typing import Dict, Iterator, Optional

from gw_dashboard.config.settings import (
    ANOMALY_Z_THRESHOLD,
    DEFAULT_STATE,
    GWL_DATA_DIR,
    GWL_FILE_PATTERN,
)
from gw_dashboard.extract.base_extractor import BaseReadingSource, JsonDirectorySource
from gw_dashboard.schemas.dashboard_models import GroundwaterDataBundle
from gw_dashboard.schemas.raw_models import GroundwaterReading
from gw_dashboard.transform.aggregations import build_aggregate
from gw_dashboard.transform.anomalies import detect_anomalies
from gw_dashboard.transform.cleaning import parse_reading

logger = logging.getLogger(__name__)


def _parse_documents(source: BaseReadingSource, counts: Dict[str, int]) -> Iterator[GroundwaterReading]:
    """Streams parsed readings, tallying documents seen and rejected."""
    for raw_doc in source.iter_documents():
        counts['documents'] += 1
        reading = parse_reading(raw_doc)
        if reading is None:
            counts['rejected'] += 1
            continue
        if not reading.is_complete:
            counts['incomplete'] += 1
        yield reading


def build_snapshot(
    source: BaseReadingSource,
    z_threshold: Optional[float] = None,
    default_state: str = DEFAULT_STATE,
) -> GroundwaterDataBundle:
    """
    Runs one full aggregation over everything the source yields:
    parse -> latest per station -> district summaries -> anomalies.

    Malformed documents are counted and dropped, never raised.
    """
    if z_threshold is None:
        z_threshold = ANOMALY_Z_THRESHOLD

    # 1. EXTRACT & AGGREGATE (STREAMING)
    counts = {'documents': 0, 'rejected': 0, 'incomplete': 0}
    result = build_aggregate(_parse_documents(source, counts), default_state=default_state)

    logger.info(
        f"✅ Processed {counts['documents']} documents into {len(result.stations)} stations "
        f"({counts['rejected']} invalid, {counts['incomplete']} incomplete)."
    )

    # 2. ANOMALIES (full station set)
    anomalies = detect_anomalies(result.stations, z_threshold=z_threshold)

    logger.info(
        f"📊 {len(result.district_summaries)} district summaries, "
        f"{len(anomalies)} anomalies at |z| >= {z_threshold}."
    )

    return GroundwaterDataBundle(
        stations=result.stations,
        district_summaries=result.district_summaries,
        anomalies=anomalies,
    )


def run_groundwater_snapshot(data_dir: Optional[str] = None) -> GroundwaterDataBundle:
    """
    Builds a snapshot from the bundled station files.

    Args:
        data_dir: Overrides GWL_DATA_DIR.
    """
    root = Path(data_dir) if data_dir else GWL_DATA_DIR
    logger.info(f"🌊 Building groundwater snapshot from {root}")

    source = JsonDirectorySource(root, pattern=GWL_FILE_PATTERN)
    return build_snapshot(source)
