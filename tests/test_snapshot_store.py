import threading
import time
import unittest

from gw_dashboard.api.snapshot_store import SnapshotStore
from gw_dashboard.extract.base_extractor import BaseReadingSource
from tests.factories import make_doc


class CountingSource(BaseReadingSource):
    """Slow source that records how many times it was read."""

    def __init__(self):
        self.reads = 0

    def iter_documents(self):
        self.reads += 1
        time.sleep(0.05)
        yield make_doc("A")


class TestSnapshotStore(unittest.TestCase):

    def test_get_builds_once(self):
        store = SnapshotStore(CountingSource())

        first = store.get()
        second = store.get()

        self.assertIs(first, second)
        self.assertEqual(store.source.reads, 1)

    def test_concurrent_first_requests_build_once(self):
        source = CountingSource()
        store = SnapshotStore(source)
        results = []

        threads = [threading.Thread(target=lambda: results.append(store.get())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(source.reads, 1)
        self.assertEqual(len(results), 8)
        self.assertTrue(all(r is results[0] for r in results))

    def test_refresh_replaces_bundle(self):
        store = SnapshotStore(CountingSource())

        first = store.get()
        refreshed = store.refresh()

        self.assertIsNot(first, refreshed)
        self.assertIs(store.get(), refreshed)
        self.assertEqual(store.source.reads, 2)


if __name__ == '__main__':
    unittest.main()
