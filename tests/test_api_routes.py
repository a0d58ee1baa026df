"""Tests for API endpoints."""


class TestHealthEndpoint:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestCaptureListing:
    def test_empty(self, client):
        resp = client.get("/api/captures")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_lists_relative_paths(self, client, capture_factory, probing_client):
        capture_factory("2024/site-a.kismet", [probing_client])
        capture_factory("root.kismet", [probing_client])
        resp = client.get("/api/captures")
        assert resp.json() == ["root.kismet", "2024/site-a.kismet"]


class TestProbes:
    def test_probes(self, client, capture_factory, probing_client, access_point):
        capture_factory("s.kismet", [probing_client, access_point])
        resp = client.get("/api/probes", params={"path": "s.kismet"})
        assert resp.status_code == 200
        assert resp.json() == {"path": "s.kismet", "probes": ["HomeNet", "CafeWifi"], "error": None}

    def test_missing_capture_is_404(self, client):
        resp = client.get("/api/probes", params={"path": "absent.kismet"})
        assert resp.status_code == 404

    def test_path_outside_base_is_404(self, client, tmp_path, capture_factory, probing_client):
        capture_factory("inner/s.kismet", [probing_client])
        resp = client.get("/api/probes", params={"path": "../s.kismet"})
        assert resp.status_code == 404

    def test_wrong_extension_is_404(self, client, tmp_path):
        (tmp_path / "notes.txt").write_text("hi")
        resp = client.get("/api/probes", params={"path": "notes.txt"})
        assert resp.status_code == 404

    def test_broken_capture_reports_error(self, client, tmp_path):
        (tmp_path / "broken.kismet").write_bytes(b"garbage" * 200)
        resp = client.get("/api/probes", params={"path": "broken.kismet"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["probes"] == []
        assert data["error"]


class TestDeviceListings:
    def test_access_points(self, client, capture_factory, probing_client, access_point):
        capture_factory("s.kismet", [probing_client, access_point])
        resp = client.get("/api/access-points", params={"path": "s.kismet"})
        assert resp.status_code == 200
        devices = resp.json()["devices"]
        assert len(devices) == 1
        assert devices[0]["identifier"] == "AA:BB:CC:00:00:02"
        assert devices[0]["device_type"] == "Wi-Fi AP"
        assert devices[0]["advertised_ssids"] == ["HomeNet"]
        assert devices[0]["metadata"] is None

    def test_stations_with_metadata(self, client, capture_factory, probing_client, access_point):
        capture_factory("s.kismet", [probing_client, access_point])
        resp = client.get(
            "/api/stations", params={"path": "s.kismet", "include_metadata": "true"}
        )
        devices = resp.json()["devices"]
        assert len(devices) == 1
        assert devices[0]["manufacturer"] == "Apple"
        assert devices[0]["probed_ssids"] == ["HomeNet", "CafeWifi"]
        assert devices[0]["metadata"]["kismet.device.base.manuf"] == "Apple"
        assert devices[0]["first_time"].startswith("2023-11-14T22:13:20")

    def test_devices_unfiltered(self, client, capture_factory, probing_client, access_point):
        capture_factory("s.kismet", [probing_client, access_point])
        resp = client.get("/api/devices", params={"path": "s.kismet"})
        assert len(resp.json()["devices"]) == 2

    def test_devices_type_filter(self, client, capture_factory, probing_client, access_point):
        capture_factory("s.kismet", [probing_client, access_point])
        resp = client.get("/api/devices", params={"path": "s.kismet", "type": ["Wi-Fi Client"]})
        devices = resp.json()["devices"]
        assert [d["identifier"] for d in devices] == ["AA:BB:CC:00:00:01"]
