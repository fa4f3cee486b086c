# -*- coding: utf-8 -*-
"""
Pydantic 请求体验证
定义头影测量服务的请求和响应数据模型（camelCase 字段名与前端一致）
"""

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from cephalometry.catalogue import get_preset_by_id


def _check_http_url(v: str, field_name: str) -> str:
    if not (v.startswith('http://') or v.startswith('https://')):
        raise ValueError(f'{field_name} must be a valid HTTP/HTTPS URL')
    return v


class PointModel(BaseModel):
    """图像像素坐标"""
    x: float
    y: float

    @field_validator('x', 'y')
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError('coordinates must be finite numbers')
        return v


class PlacedLandmarkModel(PointModel):
    """
    已放置的标志点

    Attributes:
        landmarkId: 标志点 ID（如 S、N、A）
        x, y: 图像像素坐标
        confidence: 自动标注置信度（可选）
        isAutoPlaced: 是否由自动标注放置
    """
    landmarkId: str = Field(min_length=1)
    confidence: Optional[float] = None
    isAutoPlaced: bool = False


def _validate_preset_id(v: Optional[str]) -> Optional[str]:
    if v is not None and get_preset_by_id(v) is None:
        raise ValueError(f"presetId '{v}' is not a known analysis preset")
    return v


class CalculateRequest(BaseModel):
    """
    测量计算请求

    Attributes:
        landmarks: 已放置的标志点（同一 landmarkId 以最后一条为准）
        calibration: 像素/毫米（默认 1，不大于 0 时线距保留像素单位）
        presetId: 预设 ID（可选，为空时计算整个目录）
    """
    landmarks: List[PlacedLandmarkModel] = Field(default_factory=list)
    calibration: float = 1.0
    presetId: Optional[str] = None

    @field_validator('presetId')
    @classmethod
    def validate_preset_id(cls, v: Optional[str]) -> Optional[str]:
        return _validate_preset_id(v)


class CalibrationRequest(BaseModel):
    """
    标定请求

    Attributes:
        point1, point2: 标尺两端的图像坐标
        knownDistanceMm: 自定义已知距离（毫米）
        standard: 标准尺长度（10/20/50/100，0 表示使用自定义距离）
    """
    point1: PointModel
    point2: PointModel
    knownDistanceMm: Optional[float] = None
    standard: Optional[float] = None


class CalibrationResponse(BaseModel):
    calibration: float
    knownDistanceMm: float


class AnalysisCreateRequest(BaseModel):
    """
    新建分析

    Attributes:
        imageId / patientId / clinicId: 外部标识
        presetId: 预设 ID，缺省为 QUICK
        landmarks: 已放置的标志点
        calibration: 像素/毫米，必须大于 0
        notes: 备注（可选）
    """
    imageId: str = Field(min_length=1)
    patientId: str = Field(min_length=1)
    clinicId: str = Field(min_length=1)
    presetId: Optional[str] = None
    landmarks: List[PlacedLandmarkModel] = Field(default_factory=list)
    calibration: float = Field(1.0, gt=0)
    notes: Optional[str] = None

    @field_validator('presetId')
    @classmethod
    def validate_preset_id(cls, v: Optional[str]) -> Optional[str]:
        return _validate_preset_id(v)


class AnalysisUpdateRequest(BaseModel):
    """部分更新：只覆盖请求中出现的字段，随后服务端重新计算测量值"""
    presetId: Optional[str] = None
    landmarks: Optional[List[PlacedLandmarkModel]] = None
    calibration: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None

    @field_validator('presetId')
    @classmethod
    def validate_preset_id(cls, v: Optional[str]) -> Optional[str]:
        return _validate_preset_id(v)


class CalculatedMeasurementModel(BaseModel):
    measurementId: str
    value: float
    deviation: float
    interpretation: str
    category: str


class AnalysisResponse(BaseModel):
    """
    分析记录

    measurements 与 completion 由服务端根据 landmarks / calibration / presetId 计算。
    """
    id: str
    imageId: str
    patientId: str
    clinicId: str
    presetId: str
    landmarks: List[PlacedLandmarkModel]
    measurements: List[CalculatedMeasurementModel]
    calibration: float
    notes: Optional[str] = None
    completion: int
    createdAt: str
    updatedAt: str


class ExportRequest(BaseModel):
    """
    导出请求

    Attributes:
        callbackUrl: 接收导出结果的 HTTP/HTTPS 地址
        metadata: 调用方自定义元数据，回调时原样回显
    """
    callbackUrl: str
    metadata: Optional[Dict[str, Any]] = None

    @field_validator('callbackUrl')
    @classmethod
    def validate_callback_url(cls, v: str) -> str:
        return _check_http_url(v, 'callbackUrl')


class ExportResponse(BaseModel):
    """导出响应（202 Accepted）"""
    analysisId: str
    status: str
    submittedAt: str
    metadata: Optional[Dict[str, Any]] = None


class ReportResponse(BaseModel):
    """测量计算响应"""
    status: str
    timestamp: str
    data: Dict[str, Any]


class ErrorDetail(BaseModel):
    """
    错误详情（回调中使用）

    Attributes:
        code: 错误码
        message: 开发者调试信息
        displayMessage: 用户友好提示
    """
    code: int
    message: str
    displayMessage: str


class ErrorResponse(BaseModel):
    """
    错误响应模型

    Attributes:
        code: 错误码
        message: 错误消息
        detail: 详细信息（可选）
    """
    code: int
    message: str
    detail: Optional[str] = None
