# -*- coding: utf-8 -*-
"""
交互标注界面的工具状态（只属于当前会话，不随分析保存）

坐标变换约定：
    屏幕 -> 图像: (screen - pan_offset) / zoom
    图像 -> 屏幕: image * zoom + pan_offset
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from cephalometry.utils.geometry import Point, PointLike

ZOOM_STEP = 1.2
MIN_ZOOM = 0.2
MAX_ZOOM = 5.0


class CephTool(str, Enum):
    SELECT = "SELECT"
    PLACE = "PLACE"
    CALIBRATE = "CALIBRATE"
    PAN = "PAN"
    ZOOM = "ZOOM"


@dataclass
class ToolState:
    active_tool: CephTool = CephTool.SELECT
    selected_landmark_id: Optional[str] = None
    placing_landmark_id: Optional[str] = None
    zoom_level: float = 1.0
    pan_offset: Point = field(default_factory=lambda: Point(0.0, 0.0))
    show_labels: bool = True
    show_lines: bool = True
    show_measurements: bool = True
    # 标定工具的第一次点击（图像坐标），等待第二个点
    calibration_anchor: Optional[Point] = None

    def set_tool(self, tool) -> None:
        """切换工具；离开 PLACE 时清空待放置的标志点，离开 CALIBRATE 时丢弃未完成的标定点"""
        tool = CephTool(tool)
        self.active_tool = tool
        if tool is not CephTool.PLACE:
            self.placing_landmark_id = None
        if tool is not CephTool.CALIBRATE:
            self.calibration_anchor = None

    def zoom_in(self) -> None:
        self.zoom_level = min(self.zoom_level * ZOOM_STEP, MAX_ZOOM)

    def zoom_out(self) -> None:
        self.zoom_level = max(self.zoom_level / ZOOM_STEP, MIN_ZOOM)

    def reset_view(self) -> None:
        self.zoom_level = 1.0
        self.pan_offset = Point(0.0, 0.0)

    def pan_by(self, dx: float, dy: float) -> None:
        # 屏幕像素增量，不按缩放换算
        self.pan_offset = Point(self.pan_offset.x + dx, self.pan_offset.y + dy)

    def toggle_labels(self) -> None:
        self.show_labels = not self.show_labels

    def toggle_lines(self) -> None:
        self.show_lines = not self.show_lines

    def toggle_measurements(self) -> None:
        self.show_measurements = not self.show_measurements

    def screen_to_image(self, screen: PointLike) -> Point:
        return Point(
            (screen[0] - self.pan_offset.x) / self.zoom_level,
            (screen[1] - self.pan_offset.y) / self.zoom_level,
        )

    def image_to_screen(self, image: PointLike) -> Point:
        return Point(
            image[0] * self.zoom_level + self.pan_offset.x,
            image[1] * self.zoom_level + self.pan_offset.y,
        )

    def to_dict(self) -> dict:
        return {
            "activeTool": self.active_tool.value,
            "selectedLandmarkId": self.selected_landmark_id,
            "placingLandmarkId": self.placing_landmark_id,
            "zoomLevel": self.zoom_level,
            "panOffset": {"x": self.pan_offset.x, "y": self.pan_offset.y},
            "showLabels": self.show_labels,
            "showLines": self.show_lines,
            "showMeasurements": self.show_measurements,
        }
