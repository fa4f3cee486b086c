# -*- coding: utf-8 -*-
"""HTTP 接口（Redis 与任务队列使用替身）"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from server import api
from server.tasks import export_analysis_task


class InMemoryPersistence:
    def __init__(self, save_ok=True):
        self.records = {}
        self.save_ok = save_ok

    def save_analysis(self, analysis_id, record):
        if not self.save_ok:
            return False
        self.records[analysis_id] = record
        return True

    def get_analysis(self, analysis_id):
        return self.records.get(analysis_id)

    def analysis_exists(self, analysis_id):
        return analysis_id in self.records

    def delete_analysis(self, analysis_id):
        return self.records.pop(analysis_id, None) is not None


@pytest.fixture
def store(monkeypatch):
    persistence = InMemoryPersistence()
    monkeypatch.setattr(api, "_persistence", persistence)
    return persistence


@pytest.fixture
def client(store):
    # 不进入上下文管理器，startup 事件不会连接 Redis
    return TestClient(api.app)


@pytest.fixture
def created(client, scenario_records):
    response = client.post("/api/v1/ceph/analyses", json={
        "imageId": "img-1",
        "patientId": "patient-1",
        "clinicId": "clinic-1",
        "landmarks": scenario_records,
    })
    assert response.status_code == 201
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "service": "api"}
    assert client.get("/api/v1/health").status_code == 200
    assert client.get("/").json()["status"] == "running"


def test_list_landmarks(client):
    assert len(client.get("/api/v1/ceph/landmarks").json()) == 32

    dental = client.get("/api/v1/ceph/landmarks", params={"category": "DENTAL"}).json()
    assert [lm["id"] for lm in dental] == ["U1E", "U1A", "L1E", "L1A", "U6", "L6"]
    assert dental[0]["color"] == "#f59e0b"


def test_invalid_category_uses_unified_error(client):
    response = client.get("/api/v1/ceph/landmarks", params={"category": "TEETH"})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == 10001
    assert body["displayMessage"] == "请求参数错误"


def test_list_measurements_serializes_open_ranges(client):
    measurements = {m["id"]: m for m in client.get("/api/v1/ceph/measurements").json()}
    assert len(measurements) == 17

    sna = measurements["SNA"]
    assert sna["calculation"] == "ANGLE_3POINT"
    assert sna["normative"]["ranges"][0]["min"] is None
    assert sna["normative"]["ranges"][-1]["max"] is None
    assert sna["normative"]["ranges"][1] == {
        "label": "Normal", "min": 79, "max": 85, "interpretation": "Normal maxillary position",
    }


def test_list_presets(client):
    presets = client.get("/api/v1/ceph/presets").json()
    assert [p["id"] for p in presets] == ["STEINER", "DOWNS", "TWEED", "RICKETTS", "QUICK"]
    assert [p["id"] for p in presets if p["isDefault"]] == ["QUICK"]


def test_preset_landmarks_fall_back_for_unknown_preset(client):
    assert len(client.get("/api/v1/ceph/presets/QUICK/landmarks").json()) == 8
    assert len(client.get("/api/v1/ceph/presets/NOPE/landmarks").json()) == 23


def test_calibration_standards(client):
    standards = client.get("/api/v1/ceph/calibration/standards").json()
    assert standards[-1] == {"label": "Custom", "value": 0}


def test_calculate_measurements(client, scenario_records):
    response = client.post("/api/v1/ceph/measurements/calculate", json={
        "landmarks": scenario_records, "presetId": "QUICK",
    })
    assert response.status_code == 200
    data = response.json()["data"]
    assert [m["measurementId"] for m in data["measurements"]] == ["SNA", "SNB", "ANB"]
    assert data["completion"] == 50


def test_calculate_rejects_unknown_preset(client, scenario_records):
    response = client.post("/api/v1/ceph/measurements/calculate", json={
        "landmarks": scenario_records, "presetId": "NOPE",
    })
    assert response.status_code == 400
    assert response.json()["code"] == 10001


def test_calibrate_with_standard_ruler(client):
    response = client.post("/api/v1/ceph/calibration", json={
        "point1": {"x": 0, "y": 0}, "point2": {"x": 100, "y": 0}, "standard": 10,
    })
    assert response.status_code == 200
    assert response.json() == {"calibration": 10.0, "knownDistanceMm": 10.0}


@pytest.mark.parametrize("payload", [
    {"point1": {"x": 0, "y": 0}, "point2": {"x": 100, "y": 0}, "knownDistanceMm": 0},
    {"point1": {"x": 0, "y": 0}, "point2": {"x": 100, "y": 0}, "knownDistanceMm": -3},
    {"point1": {"x": 0, "y": 0}, "point2": {"x": 100, "y": 0}},
    {"point1": {"x": 5, "y": 5}, "point2": {"x": 5, "y": 5}, "knownDistanceMm": 10},
])
def test_calibrate_rejects_invalid_input(client, payload):
    response = client.post("/api/v1/ceph/calibration", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == 10001


def test_create_analysis(created):
    assert created["presetId"] == "QUICK"
    assert [m["measurementId"] for m in created["measurements"]] == ["SNA", "SNB", "ANB"]
    assert created["completion"] == 50
    assert created["calibration"] == 1.0
    assert created["createdAt"]


def test_create_analysis_validates_calibration(client):
    response = client.post("/api/v1/ceph/analyses", json={
        "imageId": "i", "patientId": "p", "clinicId": "c", "calibration": 0,
    })
    assert response.status_code == 400


def test_create_analysis_save_failure(client, monkeypatch):
    monkeypatch.setattr(api, "_persistence", InMemoryPersistence(save_ok=False))
    response = client.post("/api/v1/ceph/analyses", json={
        "imageId": "i", "patientId": "p", "clinicId": "c",
    })
    assert response.status_code == 500
    assert response.json()["detail"]["code"] == 50001


def test_get_analysis(client, created):
    response = client.get(f"/api/v1/ceph/analyses/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_analysis(client):
    response = client.get("/api/v1/ceph/analyses/nope")
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == 10004


def test_update_analysis_recalculates(client, created):
    analysis_id = created["id"]
    response = client.patch(f"/api/v1/ceph/analyses/{analysis_id}", json={
        "presetId": "STEINER",
        "landmarks": [
            {"landmarkId": "U1E", "x": 0, "y": 0},
            {"landmarkId": "L1E", "x": 0, "y": 30},
        ],
        "calibration": 10,
        "notes": "re-traced",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["presetId"] == "STEINER"
    assert {m["measurementId"]: m["value"] for m in body["measurements"]} == {"OVERJET": 3.0, "OVERBITE": 3.0}
    assert body["notes"] == "re-traced"
    assert body["createdAt"] == created["createdAt"]


def test_update_notes_only_keeps_other_fields(client, created):
    response = client.patch(f"/api/v1/ceph/analyses/{created['id']}", json={"notes": None})
    body = response.json()
    assert body["notes"] is None
    assert body["landmarks"] == created["landmarks"]
    assert body["presetId"] == "QUICK"


def test_update_missing_analysis(client):
    response = client.patch("/api/v1/ceph/analyses/nope", json={"notes": "x"})
    assert response.status_code == 404


def test_delete_analysis(client, created, store):
    response = client.delete(f"/api/v1/ceph/analyses/{created['id']}")
    assert response.json() == {"id": created["id"], "deleted": True}
    assert created["id"] not in store.records
    assert client.delete(f"/api/v1/ceph/analyses/{created['id']}").status_code == 404


def test_export_queues_task(client, created, monkeypatch):
    apply_async = MagicMock(return_value=MagicMock(id="celery-1"))
    monkeypatch.setattr(export_analysis_task, "apply_async", apply_async)

    response = client.post(f"/api/v1/ceph/analyses/{created['id']}/export", json={
        "callbackUrl": "http://example.test/hook", "metadata": {"ticket": 7},
    })
    assert response.status_code == 202
    body = response.json()
    assert body["status"] == "QUEUED"
    assert body["metadata"] == {"ticket": 7}

    kwargs = apply_async.call_args.kwargs["kwargs"]
    assert kwargs["analysis_id"] == created["id"]
    assert kwargs["callback_url"] == "http://example.test/hook"
    assert kwargs["snapshot"] == created


def test_export_rejects_non_http_callback(client, created):
    response = client.post(f"/api/v1/ceph/analyses/{created['id']}/export", json={
        "callbackUrl": "ftp://example.test/hook",
    })
    assert response.status_code == 400


def test_export_missing_analysis(client):
    response = client.post("/api/v1/ceph/analyses/nope/export", json={"callbackUrl": "http://x.test"})
    assert response.status_code == 404


def test_export_queue_unavailable(client, created, monkeypatch):
    monkeypatch.setattr(export_analysis_task, "apply_async", MagicMock(side_effect=ConnectionError("broker down")))
    response = client.post(f"/api/v1/ceph/analyses/{created['id']}/export", json={
        "callbackUrl": "http://example.test/hook",
    })
    assert response.status_code == 500
    assert response.json()["detail"]["code"] == 50003


def test_storage_not_initialized(monkeypatch):
    monkeypatch.setattr(api, "_persistence", None)
    response = TestClient(api.app).get("/api/v1/ceph/analyses/anything")
    assert response.status_code == 500
    assert response.json()["detail"]["code"] == 50001
