# -*- coding: utf-8 -*-
"""
目录查询辅助函数

所有查询都是对静态目录的只读访问；未命中时返回 None 或空列表，不抛异常。
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Union

from .landmarks import CEPH_LANDMARKS
from .measurements import CEPH_MEASUREMENTS
from .presets import ANALYSIS_PRESETS
from .types import (
    AnalysisPreset,
    Interpretation,
    Landmark,
    LandmarkCategory,
    Measurement,
    PlacedLandmark,
)

_LANDMARKS_BY_ID: Dict[str, Landmark] = {lm.id: lm for lm in CEPH_LANDMARKS}
_MEASUREMENTS_BY_ID: Dict[str, Measurement] = {m.id: m for m in CEPH_MEASUREMENTS}
_PRESETS_BY_ID: Dict[str, AnalysisPreset] = {p.id: p for p in ANALYSIS_PRESETS}


def get_landmarks_by_category(category: Union[LandmarkCategory, str]) -> List[Landmark]:
    category = LandmarkCategory(category)
    return [lm for lm in CEPH_LANDMARKS if lm.category is category]


def get_required_landmarks(preset_id: Optional[str] = None) -> List[Landmark]:
    """
    预设需要的标志点（目录顺序）

    预设不存在（或未指定）时退回到目录中标记为 required 的全部标志点。
    """
    preset = _PRESETS_BY_ID.get(preset_id) if preset_id else None
    if preset is None:
        return [lm for lm in CEPH_LANDMARKS if lm.is_required]
    return [lm for lm in CEPH_LANDMARKS if lm.id in preset.landmarks]


def get_landmark_by_id(landmark_id: str) -> Optional[Landmark]:
    return _LANDMARKS_BY_ID.get(landmark_id)


def get_measurement_by_id(measurement_id: str) -> Optional[Measurement]:
    return _MEASUREMENTS_BY_ID.get(measurement_id)


def get_preset_by_id(preset_id: str) -> Optional[AnalysisPreset]:
    return _PRESETS_BY_ID.get(preset_id)


def get_measurement_interpretation(measurement: Measurement, value: float) -> Interpretation:
    """
    根据测量值查找解释区间并计算偏差

    Args:
        measurement: 测量项定义
        value: 测量值（已标定）

    Returns:
        Interpretation: 首个满足 min <= value < max 的区间；
            没有命中时 label 为 "Unknown"。deviation = (value - mean) / std_dev
    """
    normative = measurement.normative
    deviation = (value - normative.mean) / normative.std_dev

    for rng in normative.ranges:
        if rng.contains(value):
            return Interpretation(label=rng.label, interpretation=rng.interpretation, deviation=deviation)

    return Interpretation(label="Unknown", interpretation="Value outside expected ranges", deviation=deviation)


def can_calculate_measurement(measurement: Measurement, placed_ids: Iterable[str]) -> bool:
    """测量项声明的全部标志点都已放置时返回 True。"""
    placed = set(placed_ids)
    return all(lid in placed for lid in measurement.landmarks)


def get_analysis_completion(preset_id: Optional[str], placed: Iterable[Union[PlacedLandmark, str]]) -> int:
    """
    预设所需标志点的完成百分比

    Args:
        preset_id: 预设 ID（未知时按 get_required_landmarks 的规则回退）
        placed: PlacedLandmark 或标志点 ID

    Returns:
        int: 0-100，四舍五入到整数；没有任何需要的标志点时返回 0
    """
    required = get_required_landmarks(preset_id)
    if not required:
        return 0
    placed_ids = {p.landmark_id if isinstance(p, PlacedLandmark) else p for p in placed}
    done = sum(1 for lm in required if lm.id in placed_ids)
    percent = Decimal(done * 100) / Decimal(len(required))
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
