# -*- coding: utf-8 -*-
"""
回调管理器
将导出的分析快照 POST 到调用方提供的地址
单次尝试，不含重试机制
"""

import requests
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)


class CallbackManager:
    """
    HTTP 回调管理

    负责向调用方投递导出结果，支持超时控制。
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Args:
            config: 配置字典，需包含 callback.timeout

        Raises:
            KeyError: 配置项缺失
        """
        self.timeout = config['callback']['timeout']
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'User-Agent': 'Ceph-Analysis-Service/1.0'
        })
        logger.info(f"CallbackManager initialized with timeout={self.timeout}s")

    def send_callback(self, callback_url: str, payload: Dict[str, Any]) -> bool:
        """
        发送回调请求

        Args:
            callback_url: 回调 URL（HTTP/HTTPS）
            payload: 回调负载，包含 analysisId, status, data, error

        Returns:
            bool: 仅 HTTP 200 视为成功；超时、连接错误、其他状态码均视为失败
        """
        analysis_id = payload.get('analysisId')
        try:
            logger.info(f"Sending callback to: {callback_url}, analysisId={analysis_id}")
            response = self.session.post(callback_url, json=payload, timeout=self.timeout)
        except requests.Timeout:
            logger.error(f"Callback timeout: {callback_url}, timeout={self.timeout}s")
            return False
        except requests.ConnectionError as e:
            logger.error(f"Callback connection error: {callback_url}, error={e}")
            return False
        except requests.RequestException as e:
            logger.error(f"Callback request error: {callback_url}, error={e}")
            return False

        if response.status_code == 200:
            logger.info(f"Callback success: {callback_url}, analysisId={analysis_id}")
            return True

        logger.error(
            f"Callback failed: {callback_url}, "
            f"status={response.status_code}, "
            f"response={response.text[:200]}"
        )
        return False
