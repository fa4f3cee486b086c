# -*- coding: utf-8 -*-
"""
API 路由定义
目录查询、测量计算、标定、分析记录的增删改查与异步导出
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from server import load_config
from server.schemas import (
    AnalysisCreateRequest,
    AnalysisResponse,
    AnalysisUpdateRequest,
    CalculateRequest,
    CalibrationRequest,
    CalibrationResponse,
    ErrorResponse,
    ExportRequest,
    ExportResponse,
    ReportResponse,
)
from cephalometry.ceph_engine import CephEngine
from cephalometry.catalogue import (
    ANALYSIS_PRESETS,
    CEPH_LANDMARKS,
    CEPH_MEASUREMENTS,
    DEFAULT_PRESET_ID,
    LANDMARK_COLORS,
    Landmark,
    LandmarkCategory,
    Measurement,
    get_landmarks_by_category,
    get_required_landmarks,
)
from cephalometry.utils.ceph_measure import (
    CALIBRATION_STANDARDS,
    CUSTOM_CALIBRATION,
    InvalidCalibrationError,
    calculate_calibration,
    resolve_known_distance,
    validate_known_distance,
)
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging
import math
import uuid

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用实例

    Returns:
        FastAPI: 配置完成的 FastAPI 应用对象
    """
    app = FastAPI(
        title="Cephalometric Analysis Service",
        description="头影测量计算与分析记录服务",
        version="1.0.0"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = load_config()
    logger.info("FastAPI app created successfully")

    return app


app = create_app()


# ==================== 自定义异常处理器（统一错误响应格式）====================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    将 Pydantic 的 422 错误转换为：
    {
        "code": 10001,
        "message": "Invalid parameter: ...",
        "displayMessage": "请求参数错误"
    }
    """
    error_messages = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Unknown error")
        error_messages.append(f"{loc}: {msg}")

    return JSONResponse(
        status_code=400,
        content={
            "code": 10001,
            "message": f"Invalid parameter: {'; '.join(error_messages)}",
            "displayMessage": "请求参数错误"
        }
    )


@app.get("/")
async def root():
    return {
        "service": "Cephalometric Analysis Service",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "api"
    }


@app.get("/api/v1/health")
async def api_health_check():
    return {
        "status": "healthy",
        "service": "api"
    }


# ==================== 全局变量初始化 ====================
# 报告引擎是纯计算，直接创建；Redis 连接在应用启动时建立
_engine = CephEngine()
_persistence = None


@app.on_event("startup")
async def startup_event():
    """
    应用启动事件

    初始化全局单例:
        - AnalysisPersistence: Redis 持久化客户端
    """
    global _persistence

    from server.core.persistence import AnalysisPersistence

    _persistence = AnalysisPersistence(app.state.config)
    logger.info("API service initialized")


def _get_persistence():
    if _persistence is None:
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                code=50001,
                message="Internal server error",
                detail="Analysis storage is not initialized"
            ).model_dump()
        )
    return _persistence


def _not_found(analysis_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorResponse(
            code=10004,
            message=f"Analysis not found: {analysis_id}",
            detail=f"No analysis stored under id {analysis_id}"
        ).model_dump()
    )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ==================== 目录序列化 ====================

def _finite_or_none(value: float) -> Optional[float]:
    # JSON 不能表示 ±inf，无界的区间端点输出为 null
    return None if math.isinf(value) else value


def _landmark_info(lm: Landmark) -> Dict[str, Any]:
    return {
        "id": lm.id,
        "name": lm.name,
        "abbreviation": lm.abbreviation,
        "description": lm.description,
        "category": lm.category.value,
        "isRequired": lm.is_required,
        "color": LANDMARK_COLORS[lm.category],
    }


def _measurement_info(m: Measurement) -> Dict[str, Any]:
    return {
        "id": m.id,
        "name": m.name,
        "abbreviation": m.abbreviation,
        "description": m.description,
        "type": m.type.value,
        "unit": m.unit,
        "landmarks": list(m.landmarks),
        "calculation": m.calculation.kind.value,
        "calculable": m.is_calculable,
        "category": m.category.value,
        "normative": {
            "mean": m.normative.mean,
            "stdDev": m.normative.std_dev,
            "ranges": [
                {
                    "label": r.label,
                    "min": _finite_or_none(r.min),
                    "max": _finite_or_none(r.max),
                    "interpretation": r.interpretation,
                }
                for r in m.normative.ranges
            ],
        },
    }


# ==================== 目录接口 ====================

@app.get("/api/v1/ceph/landmarks")
async def list_landmarks(category: Optional[LandmarkCategory] = None):
    """全部标志点，或按 category 过滤（保持目录顺序）"""
    landmarks = get_landmarks_by_category(category) if category else CEPH_LANDMARKS
    return [_landmark_info(lm) for lm in landmarks]


@app.get("/api/v1/ceph/measurements")
async def list_measurements():
    return [_measurement_info(m) for m in CEPH_MEASUREMENTS]


@app.get("/api/v1/ceph/presets")
async def list_presets():
    return [
        {
            "id": p.id,
            "name": p.name,
            "description": p.description,
            "measurements": list(p.measurements),
            "landmarks": list(p.landmarks),
            "isDefault": p.id == DEFAULT_PRESET_ID,
        }
        for p in ANALYSIS_PRESETS
    ]


@app.get("/api/v1/ceph/presets/{preset_id}/landmarks")
async def list_preset_landmarks(preset_id: str):
    """预设需要的标志点；未知预设返回所有 required 标志点"""
    return [_landmark_info(lm) for lm in get_required_landmarks(preset_id)]


@app.get("/api/v1/ceph/calibration/standards")
async def list_calibration_standards():
    return [{"label": s.label, "value": s.value} for s in CALIBRATION_STANDARDS]


# ==================== 计算接口 ====================

@app.post("/api/v1/ceph/measurements/calculate", status_code=200)
async def calculate_measurements(request: CalculateRequest) -> ReportResponse:
    """
    根据标志点与标定值计算测量报告（不落库）

    Returns:
        ReportResponse: data 为 CephEngine.run 的完整报告
    """
    report = _engine.run(
        [lm.model_dump() for lm in request.landmarks],
        calibration=request.calibration,
        preset_id=request.presetId,
    )
    return ReportResponse(status="SUCCESS", timestamp=_now(), data=report)


@app.post("/api/v1/ceph/calibration", status_code=200)
async def calibrate(request: CalibrationRequest) -> CalibrationResponse:
    """
    由标尺两端坐标与已知距离计算标定值（像素/毫米）

    Raises:
        HTTPException(400): 已知距离不是有限正数，或两点重合
    """
    standard = request.standard if request.standard is not None else CUSTOM_CALIBRATION
    try:
        known_distance = validate_known_distance(resolve_known_distance(standard, request.knownDistanceMm))
    except InvalidCalibrationError as e:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponse(
                code=10001,
                message=f"Invalid parameter 'knownDistanceMm': {e}",
                detail=str(e)
            ).model_dump()
        )

    p1 = (request.point1.x, request.point1.y)
    p2 = (request.point2.x, request.point2.y)
    calibration = calculate_calibration(p1, p2, known_distance)
    if calibration <= 0:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponse(
                code=10001,
                message="Invalid parameter: calibration points must be distinct",
                detail="point1 and point2 are the same pixel"
            ).model_dump()
        )

    logger.info(f"[Calibration] {known_distance} mm -> {calibration:.4f} px/mm")
    return CalibrationResponse(calibration=calibration, knownDistanceMm=known_distance)


# ==================== 分析记录 ====================

def _build_record(analysis_id: str, fields: Dict[str, Any], created_at: str) -> Dict[str, Any]:
    """由输入字段重新计算测量值，组装完整的分析记录"""
    report = _engine.run(
        fields["landmarks"],
        calibration=fields["calibration"],
        preset_id=fields["presetId"],
    )
    return {
        "id": analysis_id,
        "imageId": fields["imageId"],
        "patientId": fields["patientId"],
        "clinicId": fields["clinicId"],
        "presetId": fields["presetId"],
        "landmarks": report["landmarks"],
        "measurements": report["measurements"],
        "calibration": fields["calibration"],
        "notes": fields.get("notes"),
        "completion": report["completion"],
        "createdAt": created_at,
        "updatedAt": _now(),
    }


def _save_or_fail(analysis_id: str, record: Dict[str, Any]) -> None:
    if not _get_persistence().save_analysis(analysis_id, record):
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                code=50001,
                message="Internal server error",
                detail="Failed to save analysis to Redis"
            ).model_dump()
        )


def _load_or_404(analysis_id: str) -> Dict[str, Any]:
    record = _get_persistence().get_analysis(analysis_id)
    if record is None:
        raise _not_found(analysis_id)
    return record


@app.post("/api/v1/ceph/analyses", status_code=201)
async def create_analysis(request: AnalysisCreateRequest) -> AnalysisResponse:
    """
    新建分析记录：服务端分配 UUID v4，并根据标志点重新计算测量值

    Raises:
        HTTPException(400): 参数验证失败
        HTTPException(500): Redis 保存失败
    """
    analysis_id = str(uuid.uuid4())
    fields = {
        "imageId": request.imageId,
        "patientId": request.patientId,
        "clinicId": request.clinicId,
        "presetId": request.presetId or DEFAULT_PRESET_ID,
        "landmarks": [lm.model_dump() for lm in request.landmarks],
        "calibration": request.calibration,
        "notes": request.notes,
    }
    record = _build_record(analysis_id, fields, created_at=_now())
    _save_or_fail(analysis_id, record)

    logger.info(
        f"[Analysis] Created: {analysis_id}, preset={record['presetId']}, "
        f"landmarks={len(record['landmarks'])}, measurements={len(record['measurements'])}"
    )
    return AnalysisResponse(**record)


@app.get("/api/v1/ceph/analyses/{analysis_id}")
async def get_analysis(analysis_id: str) -> AnalysisResponse:
    return AnalysisResponse(**_load_or_404(analysis_id))


@app.patch("/api/v1/ceph/analyses/{analysis_id}")
async def update_analysis(analysis_id: str, request: AnalysisUpdateRequest) -> AnalysisResponse:
    """
    部分更新分析记录

    presetId / landmarks / calibration 只在请求中给出非空值时覆盖（landmarks 整体替换）；
    notes 出现在请求中即覆盖（可置空）。之后重新计算测量值。
    """
    record = _load_or_404(analysis_id)

    fields = dict(record)
    if request.presetId is not None:
        fields["presetId"] = request.presetId
    if request.landmarks is not None:
        fields["landmarks"] = [lm.model_dump() for lm in request.landmarks]
    if request.calibration is not None:
        fields["calibration"] = request.calibration
    if "notes" in request.model_fields_set:
        fields["notes"] = request.notes

    updated = _build_record(analysis_id, fields, created_at=record["createdAt"])
    _save_or_fail(analysis_id, updated)

    logger.info(f"[Analysis] Updated: {analysis_id}, fields={sorted(request.model_fields_set)}")
    return AnalysisResponse(**updated)


@app.delete("/api/v1/ceph/analyses/{analysis_id}")
async def delete_analysis(analysis_id: str):
    if not _get_persistence().delete_analysis(analysis_id):
        raise _not_found(analysis_id)
    return {"id": analysis_id, "deleted": True}


@app.post("/api/v1/ceph/analyses/{analysis_id}/export", status_code=202)
async def export_analysis(analysis_id: str, request: ExportRequest) -> ExportResponse:
    """
    异步导出：将分析快照与完整报告回调到 callbackUrl

    Raises:
        HTTPException(404): 分析不存在
        HTTPException(500): 任务队列不可用
    """
    from server.tasks import export_analysis_task

    record = _load_or_404(analysis_id)
    submitted_at = _now()

    try:
        task_result = export_analysis_task.apply_async(kwargs={
            "analysis_id": analysis_id,
            "callback_url": request.callbackUrl,
            "snapshot": record,
            "metadata": request.metadata or {},
        })
        logger.info(f"Export queued: {analysis_id}, celery_id={task_result.id}")
    except Exception as e:
        logger.error(f"Failed to queue export: {e}")
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                code=50003,
                message="Task queue service unavailable",
                detail=str(e)
            ).model_dump()
        )

    return ExportResponse(
        analysisId=analysis_id,
        status="QUEUED",
        submittedAt=submitted_at,
        metadata=request.metadata
    )
