"""
交互式标志点放置：工具状态、画布事件、分析会话
"""

from .tool_state import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP, CephTool, ToolState
from .session import AnalysisSession, SaveInProgressError
from .canvas import LANDMARK_HIT_RADIUS, LandmarkCanvas

__all__ = [
    "MAX_ZOOM",
    "MIN_ZOOM",
    "ZOOM_STEP",
    "CephTool",
    "ToolState",
    "AnalysisSession",
    "SaveInProgressError",
    "LANDMARK_HIT_RADIUS",
    "LandmarkCanvas",
]
