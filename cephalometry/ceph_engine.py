# -*- coding: utf-8 -*-
"""
头影测量报告引擎

(标志点集合, 标定值, 预设) -> 报告：
测量结果、完成度、标志点进度、分类分组、临床摘要、可绘制参考线。
HTTP 层与 worker 都通过它计算，保证两边结果一致。
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from cephalometry.base_engine import BaseEngine
from cephalometry.catalogue import PlacedLandmark, get_landmark_by_id, get_preset_by_id
from cephalometry.utils.ceph_measure import (
    calculate_all_measurements,
    get_drawable_lines,
)
from cephalometry.utils.ceph_summary import (
    group_measurements_by_category,
    landmark_progress,
    summarize,
)

LandmarkRecord = Union[PlacedLandmark, Mapping[str, Any]]


def parse_landmark(record: LandmarkRecord) -> PlacedLandmark:
    """
    将请求中的标志点记录转换为 PlacedLandmark

    Args:
        record: PlacedLandmark，或包含 landmarkId / x / y（可选 confidence、isAutoPlaced）的字典

    Raises:
        ValueError: 缺少必需字段或坐标不是数字
    """
    if isinstance(record, PlacedLandmark):
        return record
    try:
        landmark_id = record["landmarkId"]
        x = float(record["x"])
        y = float(record["y"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid landmark record {record!r}: {e}")

    confidence = record.get("confidence")
    return PlacedLandmark(
        landmark_id=str(landmark_id),
        x=x,
        y=y,
        confidence=float(confidence) if confidence is not None else None,
        is_auto_placed=bool(record.get("isAutoPlaced", False)),
    )


def normalize_landmarks(records: Iterable[LandmarkRecord]) -> List[PlacedLandmark]:
    """解析并去重：同一 landmarkId 只保留最后一条，顺序以最后一次出现为准"""
    unique: Dict[str, PlacedLandmark] = {}
    for record in records:
        placed = parse_landmark(record)
        unique.pop(placed.landmark_id, None)
        unique[placed.landmark_id] = placed
    return list(unique.values())


class CephEngine(BaseEngine):
    """
    头影测量报告引擎，实现 BaseEngine 的 run() 接口。

    纯计算，不做 I/O；同样的输入总是得到同样的报告。
    """

    def __init__(self):
        super().__init__()
        self.engine_type = "cephalometric"

    def run(
        self,
        landmarks: Iterable[LandmarkRecord],
        calibration: float = 1.0,
        preset_id: Optional[str] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        计算头影测量报告

        Args:
            landmarks: 已放置的标志点（PlacedLandmark 或字典）
            calibration: 像素/毫米；不大于 0 时线距结果保留像素单位
            preset_id: 预设 ID；为空或未知时计算整个目录

        Returns:
            dict: presetId, calibration, landmarks, measurements, completion,
                progress, groups, summary, referenceLines

        Raises:
            ValueError: 标志点记录格式错误
        """
        placed = normalize_landmarks(landmarks)
        preset = get_preset_by_id(preset_id) if preset_id else None
        self._log_step(
            "开始测量计算",
            f"landmarks={len(placed)}, calibration={calibration}, preset={preset.id if preset else None}",
        )

        if preset_id and preset is None:
            self.logger.warning(f"Unknown preset {preset_id}, calculating full catalogue")
        if not calibration or calibration <= 0:
            self.logger.warning(f"Non-positive calibration {calibration}, linear values stay in pixels")

        unknown = [lm.landmark_id for lm in placed if get_landmark_by_id(lm.landmark_id) is None]
        if unknown:
            self.logger.warning(f"Landmarks not in catalogue are ignored by measurements: {unknown}")

        measurement_ids = preset.measurements if preset else None
        measurements = calculate_all_measurements(placed, calibration, measurement_ids)
        progress = landmark_progress(preset.id if preset else None, placed)

        result = {
            "presetId": preset.id if preset else None,
            "calibration": calibration,
            "landmarks": [lm.to_dict() for lm in placed],
            "measurements": [m.to_dict() for m in measurements],
            "completion": progress.percent,
            "progress": progress.to_dict(),
            "groups": [g.to_dict() for g in group_measurements_by_category(measurement_ids, measurements)],
            "summary": summarize(measurements),
            "referenceLines": [
                {
                    "id": d.line.id,
                    "name": d.line.name,
                    "color": d.line.color,
                    "from": {"x": d.start.x, "y": d.start.y},
                    "to": {"x": d.end.x, "y": d.end.y},
                }
                for d in get_drawable_lines(placed)
            ],
        }

        self._log_step("测量计算完成", f"measurements={len(measurements)}, completion={progress.percent}%")
        return result
