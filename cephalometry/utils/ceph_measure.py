# -*- coding: utf-8 -*-
"""
头影测量计算内核

输入：已放置的标志点集合 + 标定值（像素/毫米）
输出：CalculatedMeasurement 列表（只包含可计算的测量项）

缺少标志点、未知的预设或测量项、退化几何都降级为"无结果"（None）或 0，
唯一会抛出的领域异常是标定确认时的 InvalidCalibrationError。
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

import numpy as np

from cephalometry.catalogue import (
    CEPH_MEASUREMENTS,
    Angle2Line,
    Angle3Point,
    CalculatedMeasurement,
    Calculation,
    Linear,
    Measurement,
    PlacedLandmark,
    PointToLine,
    get_measurement_interpretation,
    get_preset_by_id,
)
from cephalometry.utils.geometry import (
    Point,
    PointLike,
    angle_2line,
    angle_3point,
    distance,
    point_to_line_distance,
)

logger = logging.getLogger(__name__)


class InvalidCalibrationError(ValueError):
    """标定的已知距离不是有限正数"""


def index_landmarks(placed: Iterable[PlacedLandmark]) -> Dict[str, Point]:
    """标志点 ID -> 坐标；同一 ID 出现多次时后者覆盖前者"""
    return {lm.landmark_id: Point(lm.x, lm.y) for lm in placed}


def round_value(value: float) -> float:
    """保留一位小数（四舍五入，.5 远离零）；inf / nan 原样返回"""
    if not math.isfinite(value):
        return value
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _to_mm(pixels: float, calibration: float) -> float:
    # 标定值不是正数时保留像素单位
    return pixels / calibration if calibration > 0 else pixels


def calculate_by_type(
    calculation: Calculation,
    landmark_ids: Sequence[str],
    points: Dict[str, Point],
    calibration: float,
) -> Optional[float]:
    """
    按计算方式分派

    Args:
        calculation: 计算方式变体（字段名即各点的几何角色）
        landmark_ids: 测量项声明的全部标志点，缺任意一个就返回 None
        points: 标志点 ID -> 图像坐标
        calibration: 像素/毫米，只作用于线距类测量

    Returns:
        float | None: 原始（未取整）结果；不可计算时为 None
    """
    if any(lid not in points for lid in landmark_ids):
        return None

    if isinstance(calculation, Angle3Point):
        return angle_3point(points[calculation.ray_a], points[calculation.vertex], points[calculation.ray_b])

    if isinstance(calculation, Angle2Line):
        return angle_2line(
            points[calculation.line_a_start],
            points[calculation.line_a_end],
            points[calculation.line_b_start],
            points[calculation.line_b_end],
        )

    if isinstance(calculation, Linear):
        return _to_mm(distance(points[calculation.start], points[calculation.end]), calibration)

    if isinstance(calculation, PointToLine):
        pixel_dist = point_to_line_distance(
            points[calculation.point], points[calculation.line_start], points[calculation.line_end]
        )
        return _to_mm(pixel_dist, calibration)

    # Ratio 尚未实现
    return None


def calculate_measurement(
    measurement: Measurement,
    placed: Iterable[PlacedLandmark],
    calibration: float = 1.0,
) -> Optional[CalculatedMeasurement]:
    """计算单个测量项：取一位小数并附上偏差与解释"""
    points = placed if isinstance(placed, dict) else index_landmarks(placed)
    value = calculate_by_type(measurement.calculation, measurement.landmarks, points, calibration)
    if value is None:
        return None

    result = get_measurement_interpretation(measurement, value)
    return CalculatedMeasurement(
        measurement_id=measurement.id,
        value=round_value(value),
        deviation=result.deviation,
        interpretation=f"{result.label}: {result.interpretation}",
        category=measurement.category,
    )


def calculate_all_measurements(
    placed: Iterable[PlacedLandmark],
    calibration: float = 1.0,
    measurement_ids: Optional[Sequence[str]] = None,
) -> List[CalculatedMeasurement]:
    """
    计算目录中（或 measurement_ids 指定子集中）所有可计算的测量项

    结果按目录顺序排列，不可计算的测量项直接省略。
    """
    points = index_landmarks(placed)
    if measurement_ids is None:
        measurements = CEPH_MEASUREMENTS
    else:
        wanted = set(measurement_ids)
        measurements = tuple(m for m in CEPH_MEASUREMENTS if m.id in wanted)

    results = []
    for m in measurements:
        calculated = calculate_measurement(m, points, calibration)
        if calculated is not None:
            results.append(calculated)

    logger.debug(f"Calculated {len(results)}/{len(measurements)} measurements from {len(points)} landmarks")
    return results


def calculate_preset_measurements(
    preset_id: Optional[str],
    placed: Iterable[PlacedLandmark],
    calibration: float = 1.0,
) -> List[CalculatedMeasurement]:
    """按预设范围计算；预设不存在时计算整个目录"""
    preset = get_preset_by_id(preset_id) if preset_id else None
    if preset is None:
        if preset_id:
            logger.debug(f"Unknown preset {preset_id}, calculating full catalogue")
        return calculate_all_measurements(placed, calibration)
    return calculate_all_measurements(placed, calibration, preset.measurements)


# ==================== 常用测量的快捷函数 ====================

def _points_or_none(placed: Iterable[PlacedLandmark], *ids: str) -> Optional[List[Point]]:
    points = index_landmarks(placed)
    if any(lid not in points for lid in ids):
        return None
    return [points[lid] for lid in ids]


def calculate_sna(placed: Iterable[PlacedLandmark]) -> Optional[float]:
    pts = _points_or_none(placed, "S", "N", "A")
    return angle_3point(*pts) if pts else None


def calculate_snb(placed: Iterable[PlacedLandmark]) -> Optional[float]:
    pts = _points_or_none(placed, "S", "N", "B")
    return angle_3point(*pts) if pts else None


def calculate_anb(placed: Iterable[PlacedLandmark]) -> Optional[float]:
    """ANB = SNA - SNB（有符号，区别于目录里独立计算的 ANB 三点角）"""
    placed = list(placed)
    sna = calculate_sna(placed)
    snb = calculate_snb(placed)
    if sna is None or snb is None:
        return None
    return sna - snb


def calculate_fma(placed: Iterable[PlacedLandmark]) -> Optional[float]:
    """FH 平面 (Po→Or) 与下颌平面 (Go→Me) 的夹角"""
    pts = _points_or_none(placed, "Po", "Or", "Go", "Me")
    return angle_2line(*pts) if pts else None


# ==================== 参考线 ====================

class ReferenceLine(NamedTuple):
    id: str
    name: str
    start: str
    end: str
    color: str


REFERENCE_LINES = (
    ReferenceLine("SN", "SN Plane", "S", "N", "#3b82f6"),
    ReferenceLine("FH", "Frankfort Horizontal", "Po", "Or", "#22c55e"),
    ReferenceLine("MP", "Mandibular Plane", "Go", "Me", "#ef4444"),
    ReferenceLine("NA", "NA Line", "N", "A", "#f59e0b"),
    ReferenceLine("NB", "NB Line", "N", "B", "#a855f7"),
    ReferenceLine("E", "E-Line", "Prn", "Pgs", "#ec4899"),
    ReferenceLine("U1", "Upper Incisor", "U1E", "U1A", "#f59e0b"),
    ReferenceLine("L1", "Lower Incisor", "L1E", "L1A", "#f59e0b"),
)


class DrawableLine(NamedTuple):
    line: ReferenceLine
    start: Point
    end: Point


def get_drawable_lines(placed: Iterable[PlacedLandmark]) -> List[DrawableLine]:
    """两个端点都已放置的参考线（仅用于叠加显示）"""
    points = index_landmarks(placed)
    return [
        DrawableLine(line, points[line.start], points[line.end])
        for line in REFERENCE_LINES
        if line.start in points and line.end in points
    ]


# ==================== 标定 ====================

class CalibrationStandard(NamedTuple):
    label: str
    value: float


CUSTOM_CALIBRATION = 0

CALIBRATION_STANDARDS = (
    CalibrationStandard("10mm ruler", 10),
    CalibrationStandard("20mm ruler", 20),
    CalibrationStandard("50mm ruler", 50),
    CalibrationStandard("100mm ruler", 100),
    CalibrationStandard("Custom", CUSTOM_CALIBRATION),
)


def calculate_calibration(point1: PointLike, point2: PointLike, known_distance_mm: float) -> float:
    """
    像素/毫米 = 两点像素距离 / 已知实际距离

    这里不校验 known_distance_mm，非正数会得到 inf / nan / 负数；
    调用方应先经过 validate_known_distance。
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(distance(point1, point2)) / np.float64(known_distance_mm))


def resolve_known_distance(standard: float, custom: Optional[float] = None) -> Optional[float]:
    """标准尺选择 Custom (0) 时使用自定义输入，否则使用标准尺长度"""
    if standard == CUSTOM_CALIBRATION:
        return custom
    return standard


def validate_known_distance(known_distance_mm) -> float:
    """
    标定确认边界的校验

    Raises:
        InvalidCalibrationError: 不是数字、不是有限值或不大于 0
    """
    try:
        value = float(known_distance_mm)
    except (TypeError, ValueError):
        raise InvalidCalibrationError(f"Known distance must be a number, got {known_distance_mm!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidCalibrationError(f"Known distance must be a positive finite number, got {value}")
    return value
