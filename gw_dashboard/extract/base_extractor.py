import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


class BaseReadingSource(ABC):
    """
    Abstract Base Class for reading sources.
    Enforces a standard interface so the snapshot job never cares where
    the raw station documents come from.
    """

    @abstractmethod
    def iter_documents(self) -> Iterator[Dict[str, Any]]:
        """
        Yields raw reading documents (source keys, unvalidated) one at a time.
        """
        pass


class InMemoryReadingSource(BaseReadingSource):
    """
    Source over documents that are already loaded, e.g. several district
    groups passed in by a caller or a test.
    """

    def __init__(self, *groups: Iterable[Dict[str, Any]]):
        # Snapshot the groups so later mutation by the caller does not leak in
        self._groups = [list(group) for group in groups]

    def iter_documents(self) -> Iterator[Dict[str, Any]]:
        for group in self._groups:
            yield from group


class JsonDirectorySource(BaseReadingSource):
    """
    Concrete implementation for the bundled station files.

    Layout: <root>/<District>/GWATERLVL*.json, each file a JSON array of
    reading documents (many timestamps per stationCode).
    """

    def __init__(self, root: Path, pattern: str = "GWATERLVL*.json"):
        self.root = Path(root)
        self.pattern = pattern

    def list_files(self):
        """District data files in a stable (sorted) order."""
        if not self.root.is_dir():
            logger.warning(f"⚠️ Data directory not found: {self.root}")
            return []
        return sorted(self.root.glob(f"*/{self.pattern}"))

    def iter_documents(self) -> Iterator[Dict[str, Any]]:
        for path in self.list_files():
            group = self._read_group(path)
            if group is None:
                continue
            logger.debug(f"   ...{path.parent.name}/{path.name}: {len(group)} documents")
            for document in group:
                if isinstance(document, dict):
                    yield document

    @staticmethod
    def _read_group(path: Path) -> Optional[list]:
        try:
            with open(path, mode="r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"❌ Failed to read {path}: {e}")
            return None

        if not isinstance(data, list):
            logger.warning(f"⚠️ Skipping {path}: expected a JSON array, got {type(data).__name__}")
            return None
        return data
