from typing import List, Sequence

import numpy as np

from gw_dashboard.config.settings import ANOMALY_Z_THRESHOLD
from gw_dashboard.schemas.dashboard_models import StationAnomaly, StationLatest


def detect_anomalies(
    stations: Sequence[StationLatest],
    z_threshold: float = ANOMALY_Z_THRESHOLD,
) -> List[StationAnomaly]:
    """
    Flags stations whose latest depth is at least `z_threshold` population
    standard deviations away from the mean of the given set.

    The set can be every station or a district subset; callers re-run this
    on whatever subset they display.

    Known limitation: mean and std are not robust, so one extreme value
    inflates the std it is measured against, and small sets (a district with
    two or three stations) rarely produce meaningful scores.

    Returns:
        Anomalies in input order, each with its signed z-score.
    """
    if not stations:
        return []

    depths = np.array([s.latest_depth for s in stations], dtype=float)
    if np.ptp(depths) == 0:
        # Constant input: every z-score is 0, even when the mean rounds
        z_scores = np.zeros_like(depths)
    else:
        mean = depths.mean()
        std = depths.std()  # population (ddof=0)
        if not np.isfinite(std) or std == 0:
            std = 1.0
        z_scores = (depths - mean) / std

    return [
        StationAnomaly(station_code=s.station_code, depth=s.latest_depth, z_score=float(z))
        for s, z in zip(stations, z_scores)
        if abs(z) >= z_threshold
    ]
