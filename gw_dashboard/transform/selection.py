from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

from gw_dashboard.config.settings import DEFAULT_STATE
from gw_dashboard.schemas.dashboard_models import SelectionSummary, StationLatest
from gw_dashboard.transform.cleaning import ensure_utc, normalize_district_name


def filter_stations(
    stations: Sequence[StationLatest],
    district: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[StationLatest]:
    """
    Keeps stations in `district` (any casing) whose latest reading falls
    within [start, end]. Every criterion is optional.
    """
    target = normalize_district_name(district) if district else None
    start = ensure_utc(start)
    end = ensure_utc(end)

    filtered = []
    for s in stations:
        if target and s.district != target:
            continue
        if start and s.latest_time < start:
            continue
        if end and s.latest_time > end:
            continue
        filtered.append(s)
    return filtered


def _distinct(series: pd.Series) -> List[str]:
    """Distinct non-empty values in first-seen order."""
    values = series.dropna()
    values = values[values.astype(str).str.len() > 0]
    return [str(v) for v in values.unique()]


def summarize_selection(
    stations: Sequence[StationLatest],
    district: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    default_title: str = DEFAULT_STATE,
) -> SelectionSummary:
    """
    Figures for the dashboard data panel: station count, mean latest depth,
    data time range and the acquisition modes / statuses present.

    Without a district the selection is state-wide and titled accordingly.
    """
    title = normalize_district_name(district) if district else default_title
    selected = filter_stations(stations, district=district, start=start, end=end)

    if not selected:
        return SelectionSummary(title=title, total_stations=0)

    df = pd.DataFrame([s.model_dump() for s in selected])

    return SelectionSummary(
        title=title,
        total_stations=len(df),
        avg_depth=float(df['latest_depth'].mean()),
        latest_data_time=max(s.latest_time for s in selected),
        earliest_data_time=min(s.latest_time for s in selected),
        acquisition_modes=_distinct(df['acquisition']),
        statuses=_distinct(df['status']),
    )
