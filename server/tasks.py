# -*- coding: utf-8 -*-
"""
导出任务定义
worker 用报告引擎重新生成完整报告，连同分析快照回调给调用方
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from server.worker import celery_app
from server.core.callback import CallbackManager
from server.schemas import ErrorDetail
from server import load_config
from cephalometry.ceph_engine import CephEngine

logger = logging.getLogger(__name__)

EXPORT_FAILED_CODE = 12001

_ENGINE: Optional[CephEngine] = None
_CALLBACK_MANAGER: Optional[CallbackManager] = None


def get_engine() -> CephEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = CephEngine()
    return _ENGINE


def get_callback_manager() -> CallbackManager:
    global _CALLBACK_MANAGER
    if _CALLBACK_MANAGER is None:
        _CALLBACK_MANAGER = CallbackManager(load_config())
    return _CALLBACK_MANAGER


def build_export_payload(analysis_id: str, snapshot: Dict[str, Any],
                         metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    构造成功回调负载

    Args:
        analysis_id: 分析 ID
        snapshot: 保存的分析记录（AnalysisState 的 camelCase 字典）
        metadata: 调用方元数据，原样回显

    Returns:
        dict: analysisId, status, timestamp, metadata, data{analysis, report}, error

    Raises:
        ValueError: 快照中的标志点记录格式错误
    """
    report = get_engine().run(
        snapshot.get('landmarks', []),
        calibration=snapshot.get('calibration', 1.0),
        preset_id=snapshot.get('presetId'),
    )
    return {
        "analysisId": analysis_id,
        "status": "SUCCESS",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "metadata": metadata or {},
        "data": {
            "analysis": snapshot,
            "report": report,
        },
        "error": None,
    }


@celery_app.task(name='server.tasks.export_analysis_task', bind=True)
def export_analysis_task(self, analysis_id: str, callback_url: str, snapshot: Dict[str, Any],
                         metadata: Optional[Dict[str, Any]] = None):
    """
    导出分析：生成报告并 POST 到 callback_url

    参数:
        self: Celery 任务实例（bind=True 时自动注入）
        analysis_id: 分析 ID
        callback_url: 回调地址
        snapshot: 分析快照
        metadata: 调用方元数据（可选）

    Returns:
        dict: analysisId 与回调是否投递成功

    失败时发送 FAILURE 回调后重新抛出异常，由 Celery 记录任务失败。
    """
    logger.info(f"[Worker] Export started: {analysis_id}")
    callback_mgr = get_callback_manager()

    try:
        payload = build_export_payload(analysis_id, snapshot, metadata)
    except Exception as e:
        logger.error(f"[Worker] Export failed: {analysis_id}, {e}", exc_info=True)
        callback_mgr.send_callback(callback_url, {
            "analysisId": analysis_id,
            "status": "FAILURE",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "metadata": metadata or {},
            "data": None,
            "error": ErrorDetail(
                code=EXPORT_FAILED_CODE,
                message=f"Analysis export failed: {e}",
                displayMessage="分析导出失败"
            ).model_dump()
        })
        raise

    delivered = callback_mgr.send_callback(callback_url, payload)
    logger.info(f"[Worker] Export completed: {analysis_id}, delivered={delivered}")
    return {"analysisId": analysis_id, "delivered": delivered}
