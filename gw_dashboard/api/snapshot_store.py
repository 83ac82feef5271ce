import logging
import threading
from typing import Optional

from gw_dashboard.config.settings import GWL_DATA_DIR, GWL_FILE_PATTERN
from gw_dashboard.extract.base_extractor import BaseReadingSource, JsonDirectorySource
from gw_dashboard.jobs.groundwater_snapshot import build_snapshot
from gw_dashboard.schemas.dashboard_models import GroundwaterDataBundle

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Holds the current GroundwaterDataBundle for the API.

    A refresh builds a complete new bundle and then swaps the reference,
    so readers see either the old bundle or the new one, never a mix.
    """

    def __init__(self, source: Optional[BaseReadingSource] = None):
        self._source = source
        self._bundle: Optional[GroundwaterDataBundle] = None
        # Serializes builds so concurrent first requests build only once
        self._build_lock = threading.Lock()

    @property
    def source(self) -> BaseReadingSource:
        if self._source is None:
            self._source = JsonDirectorySource(GWL_DATA_DIR, pattern=GWL_FILE_PATTERN)
        return self._source

    def set_source(self, source: BaseReadingSource) -> None:
        self._source = source
        self._bundle = None

    def refresh(self) -> GroundwaterDataBundle:
        with self._build_lock:
            return self._rebuild()

    def _rebuild(self) -> GroundwaterDataBundle:
        bundle = build_snapshot(self.source)
        self._bundle = bundle
        logger.info(f"🔄 Snapshot refreshed at {bundle.updated_at.isoformat()}")
        return bundle

    def get(self) -> GroundwaterDataBundle:
        """Returns the current bundle, building it on first use."""
        bundle = self._bundle
        if bundle is not None:
            return bundle
        with self._build_lock:
            # Another request may have built it while we waited
            if self._bundle is None:
                return self._rebuild()
            return self._bundle


# Singleton instance for easy import across modules
snapshot_store = SnapshotStore()
