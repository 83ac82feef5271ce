import unittest

from fastapi.testclient import TestClient

from gw_dashboard.api.groundwater import get_bundle
from gw_dashboard.api.snapshot_store import snapshot_store
from gw_dashboard.app import app
from gw_dashboard.extract.base_extractor import InMemoryReadingSource
from gw_dashboard.jobs.groundwater_snapshot import build_snapshot
from tests.factories import make_doc


def sample_documents():
    bankura = [make_doc(f"B{i}", depth=10.0) for i in range(4)] + [make_doc("BDEEP", depth=100.0)]
    nadia = [make_doc("N1", depth=3.0, district="NADIA"), make_doc("N2", depth=5.0, district="NADIA")]
    return bankura, nadia


class TestGroundwaterAPI(unittest.TestCase):

    def setUp(self):
        self.bundle = build_snapshot(InMemoryReadingSource(*sample_documents()))
        app.dependency_overrides[get_bundle] = lambda: self.bundle
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "active")

    def test_stations(self):
        response = self.client.get("/api/v1/groundwater/stations")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 7)

    def test_stations_filtered_by_district(self):
        response = self.client.get("/api/v1/groundwater/stations", params={"district": "NADIA"})
        self.assertEqual([s["station_code"] for s in response.json()], ["N1", "N2"])

    def test_stations_unknown_district_is_empty(self):
        response = self.client.get("/api/v1/groundwater/stations", params={"district": "Purulia"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_district_summaries(self):
        body = self.client.get("/api/v1/groundwater/districts").json()

        self.assertEqual(body["count"], 2)
        self.assertEqual([d["district"] for d in body["data"]], ["Bankura", "Nadia"])
        self.assertAlmostEqual(body["data"][0]["avg_depth"], 28.0)

    def test_single_district_summary(self):
        response = self.client.get("/api/v1/groundwater/districts/nadia")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["station_count"], 2)

    def test_unknown_district_summary_is_404(self):
        response = self.client.get("/api/v1/groundwater/districts/Purulia")
        self.assertEqual(response.status_code, 404)

    def test_anomalies_for_district_subset(self):
        body = self.client.get(
            "/api/v1/groundwater/anomalies", params={"district": "Bankura", "z": 2.0}
        ).json()

        self.assertEqual(body["district"], "Bankura")
        self.assertEqual(body["population"], 5)
        self.assertEqual([a["station_code"] for a in body["data"]], ["BDEEP"])

    def test_anomalies_reject_non_positive_threshold(self):
        response = self.client.get("/api/v1/groundwater/anomalies", params={"z": 0})
        self.assertEqual(response.status_code, 422)

    def test_selection_summary(self):
        body = self.client.get("/api/v1/groundwater/summary", params={"district": "Nadia"}).json()

        self.assertEqual(body["title"], "Nadia")
        self.assertEqual(body["total_stations"], 2)
        self.assertAlmostEqual(body["avg_depth"], 4.0)


class TestRefresh(unittest.TestCase):

    def setUp(self):
        snapshot_store.set_source(InMemoryReadingSource(*sample_documents()))
        self.client = TestClient(app)

    def tearDown(self):
        snapshot_store.set_source(None)

    def test_refresh_rebuilds_snapshot(self):
        response = self.client.post("/api/v1/groundwater/refresh")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["stations"], 7)
        self.assertEqual(body["districts"], 2)

        stations = self.client.get("/api/v1/groundwater/stations").json()
        self.assertEqual(len(stations), 7)


if __name__ == '__main__':
    unittest.main()
