# -*- coding: utf-8 -*-
"""
标注画布的指针事件处理（与具体 UI 框架无关）

事件按到达顺序逐个处理完毕，坐标均为屏幕像素；
标志点存储与几何计算只使用图像坐标，换算由 ToolState 完成。
"""

from __future__ import annotations

import logging
from typing import Optional

from cephalometry.placement.session import AnalysisSession
from cephalometry.placement.tool_state import CephTool
from cephalometry.utils.geometry import Point, distance

logger = logging.getLogger(__name__)

LANDMARK_HIT_RADIUS = 12


class LandmarkCanvas:
    def __init__(self, session: AnalysisSession):
        self.session = session
        self.is_dragging = False
        self.dragged_landmark: Optional[str] = None
        self.last_pointer = Point(0.0, 0.0)

    @property
    def tool_state(self):
        return self.session.tool_state

    def find_landmark_at(self, screen_x: float, screen_y: float) -> Optional[str]:
        """命中半径为 12 个屏幕像素（换算到图像坐标要除以缩放），取第一个命中的标志点"""
        image_pos = self.tool_state.screen_to_image((screen_x, screen_y))
        radius = LANDMARK_HIT_RADIUS / self.tool_state.zoom_level
        for lm in self.session.landmarks:
            if distance((lm.x, lm.y), image_pos) <= radius:
                return lm.landmark_id
        return None

    def pointer_down(self, screen_x: float, screen_y: float) -> None:
        self.last_pointer = Point(screen_x, screen_y)
        tool = self.tool_state.active_tool

        if tool is CephTool.SELECT:
            landmark_id = self.find_landmark_at(screen_x, screen_y)
            self.dragged_landmark = landmark_id
            self.session.select_landmark(landmark_id)
            self.is_dragging = True

        elif tool is CephTool.PLACE:
            landmark_id = self.tool_state.placing_landmark_id
            if landmark_id:
                image_pos = self.tool_state.screen_to_image((screen_x, screen_y))
                self.session.place_landmark(landmark_id, image_pos.x, image_pos.y)

        elif tool is CephTool.PAN:
            self.is_dragging = True

        elif tool is CephTool.CALIBRATE:
            image_pos = self.tool_state.screen_to_image((screen_x, screen_y))
            anchor = self.tool_state.calibration_anchor
            if anchor is None:
                self.tool_state.calibration_anchor = image_pos
                logger.debug(f"Calibration point 1 at ({image_pos.x:.1f}, {image_pos.y:.1f})")
            else:
                self.tool_state.calibration_anchor = None
                self.session.begin_calibration(anchor, image_pos)

    def pointer_move(self, screen_x: float, screen_y: float) -> None:
        dx = screen_x - self.last_pointer.x
        dy = screen_y - self.last_pointer.y
        self.last_pointer = Point(screen_x, screen_y)

        if not self.is_dragging:
            return

        tool = self.tool_state.active_tool
        if tool is CephTool.SELECT and self.dragged_landmark:
            image_pos = self.tool_state.screen_to_image((screen_x, screen_y))
            self.session.move_landmark(self.dragged_landmark, image_pos.x, image_pos.y)
        elif tool is CephTool.PAN or tool is CephTool.SELECT:
            self.session.pan(dx, dy)

    def pointer_up(self) -> None:
        self.is_dragging = False
        self.dragged_landmark = None
