# -*- coding: utf-8 -*-
"""
头影测量分析会话

持有标志点集合、当前预设、标定值和工具状态；
每次修改标志点集合或标定值后都会立即、完整地重新计算测量结果。
保存与导出通过调用方提供的回调完成，会话本身不关心存储格式。
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Union

from cephalometry.catalogue import (
    ANALYSIS_PRESETS,
    DEFAULT_PRESET_ID,
    AnalysisPreset,
    AnalysisState,
    CalculatedMeasurement,
    PlacedLandmark,
    get_landmark_by_id,
    get_preset_by_id,
)
from cephalometry.placement.tool_state import CephTool, ToolState
from cephalometry.utils.ceph_measure import (
    CUSTOM_CALIBRATION,
    InvalidCalibrationError,
    calculate_all_measurements,
    calculate_calibration,
    resolve_known_distance,
    validate_known_distance,
)
from cephalometry.utils.geometry import Point, PointLike, distance

logger = logging.getLogger(__name__)

SaveCallback = Callable[[AnalysisState], Union[None, Awaitable[None]]]
ExportCallback = Callable[[AnalysisState], None]


class SaveInProgressError(RuntimeError):
    """同一会话已有一次保存尚未完成"""


class AnalysisSession:
    """
    单张侧位片的分析会话

    Args:
        image_id / patient_id / clinic_id: 快照中携带的外部标识
        initial: 之前保存的 AnalysisState（可选）；其中的未知预设回退到第一个预设，
            标定值为 0 或缺失时回退到 1
    """

    def __init__(
        self,
        image_id: str,
        patient_id: str,
        clinic_id: str,
        initial: Optional[AnalysisState] = None,
    ):
        self.image_id = image_id
        self.patient_id = patient_id
        self.clinic_id = clinic_id
        self.analysis_id = initial.id if initial else None
        self.notes = initial.notes if initial else None

        self._landmarks: Dict[str, PlacedLandmark] = {}
        for lm in (initial.landmarks if initial else []):
            self._landmarks.pop(lm.landmark_id, None)
            self._landmarks[lm.landmark_id] = lm

        preset = get_preset_by_id(initial.preset_id) if initial and initial.preset_id else None
        self.preset: AnalysisPreset = preset or ANALYSIS_PRESETS[0]
        self.calibration: float = (initial.calibration if initial else None) or 1.0

        self.tool_state = ToolState()
        self.pending_calibration: Optional[Tuple[Point, Point]] = None
        self.is_saving = False

        self._measurements: List[CalculatedMeasurement] = []
        self._recalculate()

    # ==================== 只读视图 ====================

    @property
    def landmarks(self) -> List[PlacedLandmark]:
        return list(self._landmarks.values())

    @property
    def measurements(self) -> List[CalculatedMeasurement]:
        return list(self._measurements)

    def get_landmark(self, landmark_id: str) -> Optional[PlacedLandmark]:
        return self._landmarks.get(landmark_id)

    def _recalculate(self) -> None:
        self._measurements = calculate_all_measurements(
            self._landmarks.values(), self.calibration, self.preset.measurements
        )

    def _next_unplaced(self) -> Optional[str]:
        for landmark_id in self.preset.landmarks:
            if landmark_id not in self._landmarks:
                return landmark_id
        return None

    # ==================== 标志点 ====================

    def place_landmark(
        self,
        landmark_id: str,
        x: float,
        y: float,
        confidence: Optional[float] = None,
        is_auto_placed: bool = False,
    ) -> PlacedLandmark:
        """
        放置（或重新放置）标志点，并自动前进到预设中下一个未放置的标志点

        同一 ID 只保留最新坐标。下一个待放置点取自放置后的新集合：
        按预设顺序第一个尚未放置的标志点；全部放置完时队列清空，工具仍停留在 PLACE。
        """
        placed = PlacedLandmark(landmark_id, float(x), float(y), confidence, is_auto_placed)
        self._landmarks.pop(landmark_id, None)
        self._landmarks[landmark_id] = placed

        self._recalculate()
        self.tool_state.placing_landmark_id = self._next_unplaced()
        logger.debug(
            f"Placed {landmark_id} at ({placed.x:.1f}, {placed.y:.1f}), "
            f"next: {self.tool_state.placing_landmark_id}"
        )
        return placed

    def move_landmark(self, landmark_id: str, x: float, y: float) -> Optional[PlacedLandmark]:
        """拖动已放置的标志点；未放置的 ID 忽略"""
        current = self._landmarks.get(landmark_id)
        if current is None:
            return None
        moved = current.moved_to(x, y)
        self._landmarks[landmark_id] = moved
        self._recalculate()
        return moved

    def clear_landmarks(self) -> None:
        self._landmarks.clear()
        self.tool_state.selected_landmark_id = None
        self._recalculate()

    def select_landmark(self, landmark_id: Optional[str]) -> None:
        self.tool_state.selected_landmark_id = landmark_id

    def queue_landmark(self, landmark_id: Optional[str]) -> None:
        """标志点选择器：设置（或清空）下一个待放置的标志点"""
        if landmark_id is not None and get_landmark_by_id(landmark_id) is None:
            logger.warning(f"Ignoring unknown landmark {landmark_id}")
            return
        self.tool_state.placing_landmark_id = landmark_id

    def focus_landmark(self, landmark_id: str) -> None:
        """测量面板点击标志点：切到 PLACE 并排队该标志点"""
        if get_landmark_by_id(landmark_id) is None:
            return
        self.tool_state.set_tool(CephTool.PLACE)
        self.tool_state.placing_landmark_id = landmark_id

    # ==================== 视图 ====================

    def set_tool(self, tool) -> None:
        self.tool_state.set_tool(tool)

    def pan(self, dx: float, dy: float) -> None:
        self.tool_state.pan_by(dx, dy)

    def set_preset(self, preset_id: str) -> bool:
        """切换预设（只改变测量范围，不改变公式）；未知预设保持不变并返回 False"""
        preset = get_preset_by_id(preset_id)
        if preset is None:
            logger.warning(f"Unknown preset {preset_id}, keeping {self.preset.id}")
            return False
        self.preset = preset
        self._recalculate()
        return True

    # ==================== 标定 ====================

    def start_calibration(self) -> None:
        self.tool_state.set_tool(CephTool.CALIBRATE)
        self.tool_state.calibration_anchor = None

    def begin_calibration(self, p1: PointLike, p2: PointLike) -> None:
        """记录两个标定点（图像坐标），等待输入已知距离；工具回到 SELECT"""
        self.pending_calibration = (Point(float(p1[0]), float(p1[1])), Point(float(p2[0]), float(p2[1])))
        self.tool_state.set_tool(CephTool.SELECT)

    def confirm_calibration(
        self,
        known_distance_mm: Optional[float] = None,
        standard: Optional[float] = None,
    ) -> Optional[float]:
        """
        用已知距离完成标定

        Args:
            known_distance_mm: 自定义距离（毫米）
            standard: 标准尺长度；为 None 或 Custom (0) 时使用 known_distance_mm

        Returns:
            float | None: 新的标定值（像素/毫米）；没有待确认的标定点时返回 None

        Raises:
            InvalidCalibrationError: 距离不是有限正数或两个标定点重合，此时标定点保留以便重新输入
        """
        if self.pending_calibration is None:
            logger.warning("No calibration points to confirm")
            return None

        if standard is None:
            standard = CUSTOM_CALIBRATION
        distance_mm = validate_known_distance(resolve_known_distance(standard, known_distance_mm))

        p1, p2 = self.pending_calibration
        if distance(p1, p2) <= 0:
            raise InvalidCalibrationError("Calibration points must be distinct")
        self.calibration = calculate_calibration(p1, p2, distance_mm)
        self.pending_calibration = None
        self._recalculate()
        logger.info(f"Calibration set to {self.calibration:.4f} px/mm ({distance_mm} mm reference)")
        return self.calibration

    def cancel_calibration(self) -> None:
        self.pending_calibration = None

    # ==================== 保存 / 导出 ====================

    def snapshot(self) -> AnalysisState:
        return AnalysisState(
            image_id=self.image_id,
            patient_id=self.patient_id,
            clinic_id=self.clinic_id,
            preset_id=self.preset.id if self.preset else DEFAULT_PRESET_ID,
            landmarks=self.landmarks,
            measurements=self.measurements,
            calibration=self.calibration,
            id=self.analysis_id,
            notes=self.notes,
        )

    async def save(self, on_save: Optional[SaveCallback]) -> Optional[AnalysisState]:
        """
        通过回调保存快照（同步或异步回调均可）

        Raises:
            SaveInProgressError: 上一次保存尚未完成
        """
        if on_save is None:
            return None
        if self.is_saving:
            raise SaveInProgressError("A save is already in progress for this analysis")

        self.is_saving = True
        try:
            state = self.snapshot()
            result = on_save(state)
            if inspect.isawaitable(result):
                await result
            return state
        finally:
            self.is_saving = False

    def export(self, on_export: Optional[ExportCallback]) -> Optional[AnalysisState]:
        if on_export is None:
            return None
        state = self.snapshot()
        on_export(state)
        return state
