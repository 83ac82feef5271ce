from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from gw_dashboard.api.snapshot_store import snapshot_store
from gw_dashboard.config.settings import ANOMALY_Z_THRESHOLD
from gw_dashboard.schemas.dashboard_models import (
    DistrictSummary,
    GroundwaterDataBundle,
    SelectionSummary,
    StationAnomaly,
    StationLatest,
)
from gw_dashboard.transform.anomalies import detect_anomalies
from gw_dashboard.transform.cleaning import normalize_district_name
from gw_dashboard.transform.selection import filter_stations, summarize_selection

router = APIRouter(prefix="/api/v1/groundwater", tags=["Groundwater"])


def get_bundle() -> GroundwaterDataBundle:
    return snapshot_store.get()


# --- Response Schemas ---
class DistrictListResponse(BaseModel):
    updated_at: datetime
    count: int
    data: List[DistrictSummary]


class AnomalyResponse(BaseModel):
    district: Optional[str] = None
    z_threshold: float
    population: int  # stations the mean/std were computed over
    data: List[StationAnomaly]


class RefreshResponse(BaseModel):
    status: str
    updated_at: datetime
    stations: int
    districts: int


# --- Routes ---

@router.get("/stations", response_model=List[StationLatest])
def get_stations(
    district: Optional[str] = Query(None, description="Filter by district (any casing)"),
    bundle: GroundwaterDataBundle = Depends(get_bundle),
):
    """
    Latest reading per station, optionally for one district.
    """
    return filter_stations(bundle.stations, district=district)


@router.get("/districts", response_model=DistrictListResponse)
def get_district_summaries(bundle: GroundwaterDataBundle = Depends(get_bundle)):
    return DistrictListResponse(
        updated_at=bundle.updated_at,
        count=len(bundle.district_summaries),
        data=bundle.district_summaries,
    )


@router.get("/districts/{district}", response_model=DistrictSummary)
def get_district_summary(district: str, bundle: GroundwaterDataBundle = Depends(get_bundle)):
    name = normalize_district_name(district)
    for summary in bundle.district_summaries:
        if summary.district == name:
            return summary
    raise HTTPException(status_code=404, detail=f"No stations reported for district '{name}'.")


@router.get("/anomalies", response_model=AnomalyResponse)
def get_anomalies(
    district: Optional[str] = Query(None, description="Re-derive over this district only"),
    z: float = Query(ANOMALY_Z_THRESHOLD, gt=0, description="|z| threshold"),
    bundle: GroundwaterDataBundle = Depends(get_bundle),
):
    """
    Depth anomalies over all stations, or recomputed over one district's
    stations (mean and std of that subset).
    """
    stations = filter_stations(bundle.stations, district=district)
    return AnomalyResponse(
        district=normalize_district_name(district) if district else None,
        z_threshold=z,
        population=len(stations),
        data=detect_anomalies(stations, z_threshold=z),
    )


@router.get("/summary", response_model=SelectionSummary)
def get_selection_summary(
    district: Optional[str] = Query(None),
    start: Optional[datetime] = Query(None, description="Earliest latest-reading time (inclusive)"),
    end: Optional[datetime] = Query(None, description="Latest latest-reading time (inclusive)"),
    bundle: GroundwaterDataBundle = Depends(get_bundle),
):
    return summarize_selection(bundle.stations, district=district, start=start, end=end)


@router.post("/refresh", response_model=RefreshResponse)
def refresh_snapshot():
    """
    Rebuilds the snapshot from the reading source.
    """
    try:
        bundle = snapshot_store.refresh()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return RefreshResponse(
        status="success",
        updated_at=bundle.updated_at,
        stations=len(bundle.stations),
        districts=len(bundle.district_summaries),
    )
