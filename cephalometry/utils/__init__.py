"""
头影测量几何与计算工具函数
"""

from .ceph_measure import (
    CALIBRATION_STANDARDS,
    REFERENCE_LINES,
    InvalidCalibrationError,
    calculate_all_measurements,
    calculate_calibration,
    calculate_measurement,
    calculate_preset_measurements,
    get_drawable_lines,
    validate_known_distance,
)
from .ceph_summary import group_measurements_by_category, landmark_progress, summarize
from .geometry import Point

__all__ = [
    "CALIBRATION_STANDARDS",
    "REFERENCE_LINES",
    "InvalidCalibrationError",
    "calculate_all_measurements",
    "calculate_calibration",
    "calculate_measurement",
    "calculate_preset_measurements",
    "get_drawable_lines",
    "validate_known_distance",
    "group_measurements_by_category",
    "landmark_progress",
    "summarize",
    "Point",
]
