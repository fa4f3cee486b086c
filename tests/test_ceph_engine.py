# -*- coding: utf-8 -*-
"""报告引擎"""

import pytest

from cephalometry import CephEngine
from cephalometry.catalogue import PlacedLandmark
from cephalometry.ceph_engine import normalize_landmarks, parse_landmark


@pytest.fixture
def engine():
    return CephEngine()


def test_parse_landmark_record():
    placed = parse_landmark({"landmarkId": "S", "x": "1.5", "y": 2, "confidence": 0.8, "isAutoPlaced": True})
    assert placed == PlacedLandmark("S", 1.5, 2.0, 0.8, True)

    existing = PlacedLandmark("N", 0, 0)
    assert parse_landmark(existing) is existing


@pytest.mark.parametrize("record", [{"x": 1, "y": 2}, {"landmarkId": "S", "x": "a", "y": 2}, {"landmarkId": "S"}])
def test_parse_landmark_rejects_malformed(record):
    with pytest.raises(ValueError):
        parse_landmark(record)


def test_normalize_keeps_last_occurrence():
    result = normalize_landmarks([
        {"landmarkId": "S", "x": 0, "y": 0},
        {"landmarkId": "N", "x": 1, "y": 1},
        {"landmarkId": "S", "x": 2, "y": 2},
    ])
    assert [(lm.landmark_id, lm.x) for lm in result] == [("N", 1.0), ("S", 2.0)]


def test_run_quick_preset(engine, scenario_records):
    report = engine.run(scenario_records, calibration=1.0, preset_id="QUICK")

    assert report["presetId"] == "QUICK"
    assert [m["measurementId"] for m in report["measurements"]] == ["SNA", "SNB", "ANB"]
    assert report["measurements"][0]["value"] == 38.7
    assert report["measurements"][0]["category"] == "SKELETAL_SAGITTAL"
    assert report["completion"] == 50
    assert report["progress"]["missing"] == ["Po", "Or", "Me", "Go"]
    assert report["summary"] == {"skeletalPattern": "Class I"}
    assert [g["category"] for g in report["groups"]] == ["SKELETAL_SAGITTAL", "SKELETAL_VERTICAL"]

    lines = {line["id"]: line for line in report["referenceLines"]}
    assert set(lines) == {"SN", "NA", "NB"}
    assert lines["SN"]["from"] == {"x": 100.0, "y": 100.0}
    assert lines["SN"]["to"] == {"x": 150.0, "y": 50.0}


def test_run_unknown_preset_uses_full_catalogue(engine, scenario_records):
    report = engine.run(scenario_records + [{"landmarkId": "U6", "x": 200, "y": 170},
                                            {"landmarkId": "L6", "x": 0, "y": 0}],
                        preset_id="NOPE")
    assert report["presetId"] is None
    assert "WITS" in [m["measurementId"] for m in report["measurements"]]
    assert report["progress"]["required"] == 23


def test_run_ignores_unknown_landmark_ids(engine, scenario_records):
    report = engine.run(scenario_records + [{"landmarkId": "ZZ", "x": 1, "y": 1}])
    assert len(report["landmarks"]) == 5
    assert len(report["measurements"]) == 3


def test_run_is_deterministic(engine, scenario_records):
    assert engine.run(scenario_records, 2.5, "STEINER") == engine.run(scenario_records, 2.5, "STEINER")


def test_run_rejects_malformed_records(engine):
    with pytest.raises(ValueError):
        engine.run([{"x": 1}])
