# -*- coding: utf-8 -*-
"""
测量结果汇总：偏差等级、按分类分组、临床摘要、标志点进度
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from cephalometry.catalogue import (
    CEPH_MEASUREMENTS,
    MEASUREMENT_CATEGORY_LABELS,
    MEASUREMENT_CATEGORY_ORDER,
    CalculatedMeasurement,
    MeasurementCategory,
    PlacedLandmark,
    get_analysis_completion,
    get_required_landmarks,
)


class DeviationSeverity(str, Enum):
    NORMAL = "NORMAL"            # |d| <= 1 SD
    MILD = "MILD"                # |d| <= 2 SD
    SIGNIFICANT = "SIGNIFICANT"  # |d| > 2 SD


def deviation_severity(deviation: float) -> DeviationSeverity:
    magnitude = abs(deviation)
    if magnitude <= 1:
        return DeviationSeverity.NORMAL
    if magnitude <= 2:
        return DeviationSeverity.MILD
    return DeviationSeverity.SIGNIFICANT


@dataclass
class MeasurementGroup:
    category: MeasurementCategory
    label: str
    measurement_ids: List[str] = field(default_factory=list)
    calculated: List[CalculatedMeasurement] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.measurement_ids)

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "label": self.label,
            "measurementIds": list(self.measurement_ids),
            "calculated": len(self.calculated),
            "total": self.total,
        }


def group_measurements_by_category(
    measurement_ids: Optional[Sequence[str]],
    calculated: Iterable[CalculatedMeasurement],
) -> List[MeasurementGroup]:
    """
    将测量项按分类分组（分类按显示顺序，组内按目录顺序）

    Args:
        measurement_ids: 预设激活的测量项；为空时使用整个目录
        calculated: 已计算的结果

    Returns:
        list[MeasurementGroup]: 不含测量项的分类被省略
    """
    wanted = set(measurement_ids) if measurement_ids else None
    by_id = {c.measurement_id: c for c in calculated}

    groups: Dict[MeasurementCategory, MeasurementGroup] = {
        category: MeasurementGroup(category, MEASUREMENT_CATEGORY_LABELS[category])
        for category in MEASUREMENT_CATEGORY_ORDER
    }
    for m in CEPH_MEASUREMENTS:
        if wanted is not None and m.id not in wanted:
            continue
        group = groups[m.category]
        group.measurement_ids.append(m.id)
        if m.id in by_id:
            group.calculated.append(by_id[m.id])

    return [groups[c] for c in MEASUREMENT_CATEGORY_ORDER if groups[c].measurement_ids]


def skeletal_pattern(anb: float) -> str:
    if anb < 0:
        return "Class III"
    if anb > 4:
        return "Class II"
    return "Class I"


def growth_pattern(fma: float) -> str:
    if fma < 20:
        return "Horizontal"
    if fma > 30:
        return "Vertical"
    return "Normal"


def incisor_position(u1_sn: float) -> str:
    if u1_sn < 97:
        return "Retroclined"
    if u1_sn > 111:
        return "Proclined"
    return "Normal"


def summarize(calculated: Iterable[CalculatedMeasurement]) -> Dict[str, str]:
    """
    临床摘要

    只有对应测量项已计算时才输出该条目：
    skeletalPattern (ANB)、growthPattern (FMA)、upperIncisors (U1_SN)
    """
    by_id = {c.measurement_id: c.value for c in calculated}
    summary = {}
    if "ANB" in by_id:
        summary["skeletalPattern"] = skeletal_pattern(by_id["ANB"])
    if "FMA" in by_id:
        summary["growthPattern"] = growth_pattern(by_id["FMA"])
    if "U1_SN" in by_id:
        summary["upperIncisors"] = incisor_position(by_id["U1_SN"])
    return summary


@dataclass
class LandmarkProgress:
    placed: int
    required: int
    percent: int
    missing: List[str]

    def to_dict(self) -> dict:
        return {
            "placed": self.placed,
            "required": self.required,
            "percent": self.percent,
            "missing": list(self.missing),
        }


def landmark_progress(preset_id: Optional[str], placed: Iterable[PlacedLandmark]) -> LandmarkProgress:
    """预设所需标志点的放置进度；missing 按目录顺序列出未放置的标志点"""
    placed_ids = {lm.landmark_id for lm in placed}
    required = get_required_landmarks(preset_id)
    missing = [lm.id for lm in required if lm.id not in placed_ids]
    return LandmarkProgress(
        placed=len(required) - len(missing),
        required=len(required),
        percent=get_analysis_completion(preset_id, placed_ids),
        missing=missing,
    )
