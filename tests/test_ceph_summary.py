# -*- coding: utf-8 -*-
"""测量结果汇总"""

from cephalometry.catalogue import (
    ANALYSIS_PRESETS,
    CalculatedMeasurement,
    MeasurementCategory,
    PlacedLandmark,
    get_preset_by_id,
)
from cephalometry.utils.ceph_summary import (
    DeviationSeverity,
    deviation_severity,
    group_measurements_by_category,
    growth_pattern,
    incisor_position,
    landmark_progress,
    skeletal_pattern,
    summarize,
)


def _calc(measurement_id, value, category=MeasurementCategory.SKELETAL_SAGITTAL):
    return CalculatedMeasurement(measurement_id, value, 0.0, "", category)


def test_deviation_severity_bands():
    assert deviation_severity(1.0) is DeviationSeverity.NORMAL
    assert deviation_severity(-1.5) is DeviationSeverity.MILD
    assert deviation_severity(2.1) is DeviationSeverity.SIGNIFICANT


def test_clinical_patterns():
    assert skeletal_pattern(-1) == "Class III"
    assert skeletal_pattern(0) == "Class I"
    assert skeletal_pattern(4) == "Class I"
    assert skeletal_pattern(4.1) == "Class II"

    assert growth_pattern(19.9) == "Horizontal"
    assert growth_pattern(25) == "Normal"
    assert growth_pattern(30.1) == "Vertical"

    assert incisor_position(96) == "Retroclined"
    assert incisor_position(97) == "Normal"
    assert incisor_position(112) == "Proclined"


def test_summarize_only_reports_calculated_entries():
    summary = summarize([_calc("ANB", 6.0), _calc("FMA", 18.0, MeasurementCategory.SKELETAL_VERTICAL)])
    assert summary == {"skeletalPattern": "Class II", "growthPattern": "Horizontal"}
    assert summarize([]) == {}


def test_group_by_category_for_preset():
    quick = get_preset_by_id("QUICK")
    groups = group_measurements_by_category(quick.measurements, [_calc("SNA", 80.0)])

    assert [g.category for g in groups] == [
        MeasurementCategory.SKELETAL_SAGITTAL,
        MeasurementCategory.SKELETAL_VERTICAL,
    ]
    sagittal = groups[0].to_dict()
    assert sagittal["label"] == "Skeletal (Sagittal)"
    assert sagittal["measurementIds"] == ["SNA", "SNB", "ANB"]
    assert (sagittal["calculated"], sagittal["total"]) == (1, 3)


def test_group_by_category_whole_catalogue_skips_empty_categories():
    groups = group_measurements_by_category(None, [])
    categories = [g.category for g in groups]
    assert MeasurementCategory.AIRWAY not in categories
    assert sum(g.total for g in groups) == 17


def test_landmark_progress(scenario_landmarks):
    progress = landmark_progress("QUICK", scenario_landmarks[:3])
    assert progress.placed == 3
    assert progress.required == 8
    assert progress.percent == 38
    assert progress.missing == ["Po", "Or", "B", "Me", "Go"]


def test_landmark_progress_complete():
    steiner = ANALYSIS_PRESETS[0]
    placed = [PlacedLandmark(lid, 0, 0) for lid in steiner.landmarks]
    progress = landmark_progress(steiner.id, placed)
    assert progress.to_dict() == {"placed": 10, "required": 10, "percent": 100, "missing": []}
