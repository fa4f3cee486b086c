# -*- coding: utf-8 -*-
"""标志点 / 测量项 / 预设目录及查询函数"""

import pytest

from cephalometry.catalogue import (
    ANALYSIS_PRESETS,
    CEPH_LANDMARKS,
    CEPH_MEASUREMENTS,
    DEFAULT_PRESET_ID,
    Angle3Point,
    CalculationKind,
    LandmarkCategory,
    Measurement,
    MeasurementCategory,
    MeasurementValueType,
    NormativeData,
    Ratio,
    build_calculation,
    can_calculate_measurement,
    get_analysis_completion,
    get_landmark_by_id,
    get_landmarks_by_category,
    get_measurement_by_id,
    get_measurement_interpretation,
    get_preset_by_id,
    get_required_landmarks,
    measurement,
)


def test_catalogue_sizes_and_unique_ids():
    assert len(CEPH_LANDMARKS) == 32
    assert len(CEPH_MEASUREMENTS) == 17
    assert len({lm.id for lm in CEPH_LANDMARKS}) == 32
    assert len({m.id for m in CEPH_MEASUREMENTS}) == 17


def test_measurements_reference_catalogue_landmarks():
    for m in CEPH_MEASUREMENTS:
        for lid in m.landmarks:
            assert get_landmark_by_id(lid) is not None, (m.id, lid)


def test_normative_ranges_are_ascending_and_disjoint():
    for m in CEPH_MEASUREMENTS:
        ranges = m.normative.ranges
        assert ranges, m.id
        for rng in ranges:
            assert rng.min < rng.max
        for prev, nxt in zip(ranges, ranges[1:]):
            assert prev.max <= nxt.min, m.id


def test_presets_reference_catalogue_entries():
    assert get_preset_by_id(DEFAULT_PRESET_ID) is not None
    for preset in ANALYSIS_PRESETS:
        for mid in preset.measurements:
            assert get_measurement_by_id(mid) is not None
        for lid in preset.landmarks:
            assert get_landmark_by_id(lid) is not None


def test_lookup_misses_return_none():
    assert get_landmark_by_id("XX") is None
    assert get_measurement_by_id("XX") is None
    assert get_preset_by_id("XX") is None


def test_landmarks_by_category_keeps_catalogue_order():
    dental = get_landmarks_by_category(LandmarkCategory.DENTAL)
    assert [lm.id for lm in dental] == ["U1E", "U1A", "L1E", "L1A", "U6", "L6"]
    assert get_landmarks_by_category("DENTAL") == dental


def test_required_landmarks_for_preset_use_catalogue_order():
    ids = [lm.id for lm in get_required_landmarks("QUICK")]
    assert ids == ["S", "N", "Po", "Or", "A", "B", "Me", "Go"]


def test_required_landmarks_fall_back_to_required_flag():
    fallback = get_required_landmarks("NOPE")
    assert fallback == get_required_landmarks()
    assert all(lm.is_required for lm in fallback)
    assert len(fallback) == 23


def test_analysis_completion_rounds_half_up():
    # 3 / 8 = 37.5%
    assert get_analysis_completion("QUICK", ["S", "N", "A"]) == 38
    assert get_analysis_completion("QUICK", []) == 0
    assert get_analysis_completion("QUICK", ["S", "N", "A", "B", "Po", "Or", "Me", "Go", "U6"]) == 100


def test_can_calculate_measurement():
    sna = get_measurement_by_id("SNA")
    assert can_calculate_measurement(sna, ["S", "N", "A"])
    assert not can_calculate_measurement(sna, ["S", "N"])


def test_interpretation_first_matching_range():
    sna = get_measurement_by_id("SNA")
    result = get_measurement_interpretation(sna, 82)
    assert result.label == "Normal"
    assert result.deviation == pytest.approx(0.0)

    # 左闭右开：85 属于 Protrusion
    assert get_measurement_interpretation(sna, 85).label == "Maxillary Protrusion"
    assert get_measurement_interpretation(sna, 78).deviation == pytest.approx(-2.0)


def test_interpretation_outside_ranges_is_unknown():
    narrow = measurement(
        "NARROW", "Narrow", "N", "", MeasurementValueType.ANGLE, "°",
        ["S", "N", "A"], CalculationKind.ANGLE_3POINT, MeasurementCategory.SKELETAL_SAGITTAL,
        mean=5, std_dev=5, ranges=[("Normal", 0, 10, "ok")],
    )
    result = get_measurement_interpretation(narrow, 10)
    assert (result.label, result.interpretation) == ("Unknown", "Value outside expected ranges")
    assert result.deviation == pytest.approx(1.0)


def test_build_calculation_names_geometric_roles():
    calc = build_calculation("ANGLE_3POINT", ["S", "N", "A"])
    assert calc == Angle3Point(ray_a="S", vertex="N", ray_b="A")

    wits = get_measurement_by_id("WITS").calculation
    assert (wits.point, wits.line_start, wits.line_end) == ("A", "B", "U6")


def test_build_calculation_rejects_short_landmark_list():
    with pytest.raises(ValueError):
        build_calculation(CalculationKind.ANGLE_2LINE, ["S", "N", "A"])


def test_measurement_rejects_undeclared_calculation_landmarks():
    with pytest.raises(ValueError):
        Measurement(
            id="BAD", name="Bad", abbreviation="B", description="",
            type=MeasurementValueType.ANGLE, unit="°",
            landmarks=("S", "N"),
            calculation=Angle3Point("S", "N", "A"),
            normative=NormativeData(mean=0, std_dev=1),
            category=MeasurementCategory.SKELETAL_SAGITTAL,
        )


def test_ratio_measurement_is_not_calculable():
    ratio = measurement(
        "RATIO_X", "Ratio", "R", "", MeasurementValueType.RATIO, "%",
        ["S", "Go", "N", "Me"], "RATIO", MeasurementCategory.SKELETAL_VERTICAL,
        mean=65, std_dev=3,
    )
    assert isinstance(ratio.calculation, Ratio)
    assert not ratio.is_calculable


def test_analysis_completion_is_monotonic():
    placed = []
    last = get_analysis_completion("RICKETTS", placed)
    for lm in CEPH_LANDMARKS:
        placed.append(lm.id)
        current = get_analysis_completion("RICKETTS", placed)
        assert last <= current <= 100
        last = current
    assert last == 100


def test_preset_labels():
    steiner = get_preset_by_id("STEINER")
    assert steiner.description == "Classic Steiner cephalometric analysis"
    assert get_preset_by_id("DOWNS").name == "Downs' Analysis"
