# -*- coding: utf-8 -*-
"""
头影测量目录的数据类型定义
标志点、测量项、正常值范围、分析预设以及测量计算方式（带名字段的变体）
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


class LandmarkCategory(str, Enum):
    CRANIAL_BASE = "CRANIAL_BASE"
    MAXILLA = "MAXILLA"
    MANDIBLE = "MANDIBLE"
    DENTAL = "DENTAL"
    SOFT_TISSUE = "SOFT_TISSUE"


class MeasurementValueType(str, Enum):
    ANGLE = "ANGLE"
    LINEAR = "LINEAR"
    RATIO = "RATIO"


class MeasurementCategory(str, Enum):
    SKELETAL_SAGITTAL = "SKELETAL_SAGITTAL"
    SKELETAL_VERTICAL = "SKELETAL_VERTICAL"
    DENTAL = "DENTAL"
    SOFT_TISSUE = "SOFT_TISSUE"
    AIRWAY = "AIRWAY"


class CalculationKind(str, Enum):
    ANGLE_3POINT = "ANGLE_3POINT"    # 三点角，中间点为顶点
    ANGLE_2LINE = "ANGLE_2LINE"      # 两线夹角（4 点）
    LINE_TO_POINT = "LINE_TO_POINT"  # 点到直线的垂直距离（有符号）
    LINEAR = "LINEAR"                # 两点距离
    RATIO = "RATIO"                  # 比值（尚未支持）


@dataclass(frozen=True)
class Landmark:
    """解剖标志点定义（静态，目录加载后不再修改）。"""

    id: str
    name: str
    abbreviation: str
    description: str
    category: LandmarkCategory
    is_required: bool = False


@dataclass(frozen=True)
class PlacedLandmark:
    """
    操作者放置的标志点

    Attributes:
        landmark_id: 标志点 ID（引用目录中的 Landmark）
        x, y: 图像原始像素坐标
        confidence: AI 辅助放置时的置信度（可选）
        is_auto_placed: 是否由自动标注放置
    """

    landmark_id: str
    x: float
    y: float
    confidence: Optional[float] = None
    is_auto_placed: bool = False

    def moved_to(self, x: float, y: float) -> "PlacedLandmark":
        return PlacedLandmark(self.landmark_id, float(x), float(y), self.confidence, self.is_auto_placed)

    def to_dict(self) -> dict:
        return {
            "landmarkId": self.landmark_id,
            "x": self.x,
            "y": self.y,
            "confidence": self.confidence,
            "isAutoPlaced": self.is_auto_placed,
        }


@dataclass(frozen=True)
class NormativeRange:
    label: str
    min: float
    max: float
    interpretation: str

    def contains(self, value: float) -> bool:
        # 左闭右开
        return self.min <= value < self.max


@dataclass(frozen=True)
class NormativeData:
    """
    正常值数据

    ranges 按目录作者给出的顺序保存（约定升序、互不重叠），这里不排序也不校验。
    """

    mean: float
    std_dev: float
    ranges: Tuple[NormativeRange, ...] = ()


# ==================== 计算方式变体 ====================

@dataclass(frozen=True)
class Angle3Point:
    """∠ray_a-vertex-ray_b，顶点在 vertex"""

    ray_a: str
    vertex: str
    ray_b: str

    kind = CalculationKind.ANGLE_3POINT
    supported = True

    @property
    def landmark_ids(self) -> Tuple[str, ...]:
        return (self.ray_a, self.vertex, self.ray_b)


@dataclass(frozen=True)
class Angle2Line:
    """line_a (start→end) 与 line_b (start→end) 的夹角，结果折叠到 [0, 90]"""

    line_a_start: str
    line_a_end: str
    line_b_start: str
    line_b_end: str

    kind = CalculationKind.ANGLE_2LINE
    supported = True

    @property
    def landmark_ids(self) -> Tuple[str, ...]:
        return (self.line_a_start, self.line_a_end, self.line_b_start, self.line_b_end)


@dataclass(frozen=True)
class Linear:
    start: str
    end: str

    kind = CalculationKind.LINEAR
    supported = True

    @property
    def landmark_ids(self) -> Tuple[str, ...]:
        return (self.start, self.end)


@dataclass(frozen=True)
class PointToLine:
    """point 到直线 line_start→line_end 的有符号垂直距离"""

    point: str
    line_start: str
    line_end: str

    kind = CalculationKind.LINE_TO_POINT
    supported = True

    @property
    def landmark_ids(self) -> Tuple[str, ...]:
        return (self.point, self.line_start, self.line_end)


@dataclass(frozen=True)
class Ratio:
    """
    比值测量（尚未实现）

    保留该变体以便目录作者声明，但计算内核永远不会为其产出结果。
    """

    landmarks: Tuple[str, ...] = ()

    kind = CalculationKind.RATIO
    supported = False

    @property
    def landmark_ids(self) -> Tuple[str, ...]:
        return tuple(self.landmarks)


Calculation = Union[Angle3Point, Angle2Line, Linear, PointToLine, Ratio]

# 各计算方式需要的最少标志点数量（沿用历史的位置列表约定）
MIN_LANDMARKS = {
    CalculationKind.ANGLE_3POINT: 3,
    CalculationKind.ANGLE_2LINE: 4,
    CalculationKind.LINEAR: 2,
    CalculationKind.LINE_TO_POINT: 3,
    CalculationKind.RATIO: 0,
}


def build_calculation(kind: Union[CalculationKind, str], landmark_ids: Sequence[str]) -> Calculation:
    """
    将位置列表约定映射为带名字段的计算变体

    - ANGLE_3POINT: [ray_a, vertex, ray_b, ...]
    - ANGLE_2LINE: [a_start, a_end, b_start, b_end, ...]
    - LINEAR: [start, end, ...]
    - LINE_TO_POINT: [point, line_start, line_end, ...]
    - RATIO: 原样保存

    Raises:
        ValueError: 未知计算方式，或标志点数量不足
    """
    kind = CalculationKind(kind)
    ids = list(landmark_ids)
    required = MIN_LANDMARKS[kind]
    if len(ids) < required:
        raise ValueError(
            f"{kind.value} needs at least {required} landmarks, got {len(ids)}: {ids}"
        )

    if kind is CalculationKind.ANGLE_3POINT:
        return Angle3Point(ray_a=ids[0], vertex=ids[1], ray_b=ids[2])
    if kind is CalculationKind.ANGLE_2LINE:
        return Angle2Line(ids[0], ids[1], ids[2], ids[3])
    if kind is CalculationKind.LINEAR:
        return Linear(start=ids[0], end=ids[1])
    if kind is CalculationKind.LINE_TO_POINT:
        return PointToLine(point=ids[0], line_start=ids[1], line_end=ids[2])
    return Ratio(landmarks=tuple(ids))


@dataclass(frozen=True)
class Measurement:
    """
    测量项定义

    Attributes:
        id: 测量项 ID（如 SNA）
        name / abbreviation / description: 展示信息
        type: 数值类型（角度 / 线距 / 比值）
        unit: 单位（° 或 mm）
        landmarks: 该测量消耗的全部标志点 ID（缺任意一个即不可计算）
        calculation: 计算方式变体
        normative: 正常值数据
        category: 测量分类

    Raises:
        ValueError: calculation 引用了 landmarks 之外的标志点
    """

    id: str
    name: str
    abbreviation: str
    description: str
    type: MeasurementValueType
    unit: str
    landmarks: Tuple[str, ...]
    calculation: Calculation
    normative: NormativeData
    category: MeasurementCategory

    def __post_init__(self):
        undeclared = [lid for lid in self.calculation.landmark_ids if lid not in self.landmarks]
        if undeclared:
            raise ValueError(
                f"Measurement {self.id}: calculation uses undeclared landmarks {undeclared}"
            )
        if not self.calculation.supported:
            logger.warning(
                f"Measurement {self.id} uses unsupported calculation "
                f"{self.calculation.kind.value}; it will never be calculated"
            )

    @property
    def is_calculable(self) -> bool:
        return self.calculation.supported


def measurement(
    id: str,
    name: str,
    abbreviation: str,
    description: str,
    type: MeasurementValueType,
    unit: str,
    landmarks: Sequence[str],
    calculation: Union[CalculationKind, str],
    category: MeasurementCategory,
    mean: float,
    std_dev: float,
    ranges: Sequence[Tuple[str, float, float, str]] = (),
) -> Measurement:
    """目录编写辅助函数：按位置列表约定构造 Measurement。"""
    return Measurement(
        id=id,
        name=name,
        abbreviation=abbreviation,
        description=description,
        type=type,
        unit=unit,
        landmarks=tuple(landmarks),
        calculation=build_calculation(calculation, landmarks),
        normative=NormativeData(
            mean=mean,
            std_dev=std_dev,
            ranges=tuple(NormativeRange(label, lo, hi, text) for label, lo, hi, text in ranges),
        ),
        category=category,
    )


@dataclass(frozen=True)
class AnalysisPreset:
    """分析预设：一组测量项及其需要的标志点（有序）。"""

    id: str
    name: str
    description: str
    measurements: Tuple[str, ...]
    landmarks: Tuple[str, ...]


@dataclass(frozen=True)
class CalculatedMeasurement:
    """
    计算结果（派生、临时）

    value 保留一位小数；deviation 为相对均值的标准差倍数。
    """

    measurement_id: str
    value: float
    deviation: float
    interpretation: str
    category: MeasurementCategory

    def to_dict(self) -> dict:
        return {
            "measurementId": self.measurement_id,
            "value": self.value,
            "deviation": self.deviation,
            "interpretation": self.interpretation,
            "category": self.category.value,
        }


@dataclass(frozen=True)
class Interpretation:
    label: str
    interpretation: str
    deviation: float


@dataclass
class AnalysisState:
    """
    保存/导出的分析快照（由外部协作方持久化）

    引擎只负责产出这份内存结构，不规定存储格式。
    """

    image_id: str
    patient_id: str
    clinic_id: str
    preset_id: str
    landmarks: list = field(default_factory=list)
    measurements: list = field(default_factory=list)
    calibration: float = 1.0
    id: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "imageId": self.image_id,
            "patientId": self.patient_id,
            "clinicId": self.clinic_id,
            "presetId": self.preset_id,
            "landmarks": [lm.to_dict() for lm in self.landmarks],
            "measurements": [m.to_dict() for m in self.measurements],
            "calibration": self.calibration,
            "notes": self.notes,
        }
