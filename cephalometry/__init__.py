"""
头影测量引擎

- catalogue: 标志点 / 测量项 / 分析预设目录
- utils: 几何运算、测量计算内核、结果汇总
- placement: 交互式标志点放置与分析会话
- ceph_engine: 报告引擎（HTTP 服务与 worker 共用）
"""

from cephalometry.ceph_engine import CephEngine
from cephalometry.placement import AnalysisSession

__all__ = ["CephEngine", "AnalysisSession"]
