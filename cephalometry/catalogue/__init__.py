# -*- coding: utf-8 -*-
"""头影测量静态目录：标志点、测量项、分析预设。"""

from .types import (
    Angle2Line,
    Angle3Point,
    AnalysisPreset,
    AnalysisState,
    Calculation,
    CalculatedMeasurement,
    CalculationKind,
    Interpretation,
    Landmark,
    LandmarkCategory,
    Linear,
    Measurement,
    MeasurementCategory,
    MeasurementValueType,
    NormativeData,
    NormativeRange,
    PlacedLandmark,
    PointToLine,
    Ratio,
    build_calculation,
    measurement,
)
from .landmarks import (
    CEPH_LANDMARKS,
    LANDMARK_CATEGORY_LABELS,
    LANDMARK_CATEGORY_ORDER,
    LANDMARK_COLORS,
)
from .measurements import (
    CEPH_MEASUREMENTS,
    MEASUREMENT_CATEGORY_LABELS,
    MEASUREMENT_CATEGORY_ORDER,
)
from .presets import ANALYSIS_PRESETS, DEFAULT_PRESET_ID
from .lookup import (
    can_calculate_measurement,
    get_analysis_completion,
    get_landmark_by_id,
    get_landmarks_by_category,
    get_measurement_by_id,
    get_measurement_interpretation,
    get_preset_by_id,
    get_required_landmarks,
)

__all__ = [
    "Angle2Line",
    "Angle3Point",
    "AnalysisPreset",
    "AnalysisState",
    "Calculation",
    "CalculatedMeasurement",
    "CalculationKind",
    "Interpretation",
    "Landmark",
    "LandmarkCategory",
    "Linear",
    "Measurement",
    "MeasurementCategory",
    "MeasurementValueType",
    "NormativeData",
    "NormativeRange",
    "PlacedLandmark",
    "PointToLine",
    "Ratio",
    "build_calculation",
    "measurement",
    "CEPH_LANDMARKS",
    "LANDMARK_CATEGORY_LABELS",
    "LANDMARK_CATEGORY_ORDER",
    "LANDMARK_COLORS",
    "CEPH_MEASUREMENTS",
    "MEASUREMENT_CATEGORY_LABELS",
    "MEASUREMENT_CATEGORY_ORDER",
    "ANALYSIS_PRESETS",
    "DEFAULT_PRESET_ID",
    "can_calculate_measurement",
    "get_analysis_completion",
    "get_landmark_by_id",
    "get_landmarks_by_category",
    "get_measurement_by_id",
    "get_measurement_interpretation",
    "get_preset_by_id",
    "get_required_landmarks",
]
