# -*- coding: utf-8 -*-
"""
Engine 基础类
定义所有计算引擎的通用接口和共享功能
"""

from abc import ABC, abstractmethod
import logging


class BaseEngine(ABC):
    """
    计算引擎基类

    具体的 Engine（如 CephEngine）必须继承此类并实现 run() 方法。
    提供统一的接口规范和共享的工具方法。
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.engine_type = "base"  # 子类需覆盖
        self.logger.info(f"{self.__class__.__name__} initialized")

    @abstractmethod
    def run(self, *args, **kwargs) -> dict:
        """
        执行计算流程（抽象方法，子类必须实现）

        Returns:
            dict: 完整的报告字段（camelCase 键）

        Raises:
            NotImplementedError: 子类未实现此方法
        """
        raise NotImplementedError("Subclass must implement run() method")

    def _log_step(self, step_name: str, message: str = ""):
        """
        统一的步骤日志记录

        Note:
            - 使用统一的日志格式：[engine_type] step_name: message
        """
        log_msg = f"[{self.engine_type}] {step_name}"
        if message:
            log_msg += f": {message}"
        self.logger.info(log_msg)
