import sys

from gw_dashboard.jobs.groundwater_snapshot import run_groundwater_snapshot
from gw_dashboard.schemas.dashboard_models import GroundwaterDataBundle
from gw_dashboard.utils.logger import setup_logger

logger = setup_logger()


def log_snapshot(bundle: GroundwaterDataBundle):
    """Prints the district table and anomaly list to the log."""
    if not bundle.stations:
        logger.info("No groundwater data loaded.")
        return

    logger.info(f"District summary (updated {bundle.updated_at:%Y-%m-%d %H:%M} UTC):")
    for d in bundle.district_summaries:
        logger.info(
            f"   {d.district:<20} stations={d.station_count:<4} "
            f"avg={d.avg_depth:.2f}m min={d.min_depth:.2f}m max={d.max_depth:.2f}m "
            f"latest={d.latest_measurement_time:%Y-%m-%d}"
        )

    for a in bundle.anomalies:
        logger.info(f"   ⚠️ {a.station_code}: depth={a.depth:.2f}m z={a.z_score:+.2f}")


def main():
    """
    Main Entry Point for Background Jobs.
    Usage: python -m gw_dashboard.main [job_name] [optional: data_dir]
    """
    if len(sys.argv) < 2:
        logger.error("No job specified. Usage: python -m gw_dashboard.main <job_name> [data_dir]")
        sys.exit(1)

    job_name = sys.argv[1]
    data_dir = sys.argv[2] if len(sys.argv) > 2 else None

    logger.info(f"Starting Groundwater Dashboard job: {job_name}")

    try:
        if job_name == "snapshot":
            log_snapshot(run_groundwater_snapshot(data_dir))
        else:
            logger.warning(f"Job {job_name} not recognized.")

    except Exception:
        logger.exception("Critical Job Failure")
        sys.exit(1)


if __name__ == "__main__":
    main()
