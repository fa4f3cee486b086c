# -*- coding: utf-8 -*-
"""
标准头影测量项目录

正常值（均值、标准差）与解释区间取自临床常用参考值。
每个测量项的 ranges 必须按升序、互不重叠给出，计算内核按顺序取第一个命中的区间。
"""

from __future__ import annotations

from typing import Dict, Tuple

from .types import (
    CalculationKind,
    Measurement,
    MeasurementCategory,
    MeasurementValueType,
    measurement,
)

INF = float("inf")

_ANGLE = MeasurementValueType.ANGLE
_LINEAR = MeasurementValueType.LINEAR
_K = CalculationKind
_M = MeasurementCategory

CEPH_MEASUREMENTS: Tuple[Measurement, ...] = (
    # ==================== 骨性矢状向 ====================
    measurement(
        "SNA", "SNA Angle", "SNA",
        "Anteroposterior position of maxilla relative to cranial base",
        _ANGLE, "°", ["S", "N", "A"], _K.ANGLE_3POINT, _M.SKELETAL_SAGITTAL,
        mean=82, std_dev=2,
        ranges=[
            ("Maxillary Retrusion", -INF, 79, "Maxilla is positioned posteriorly"),
            ("Normal", 79, 85, "Normal maxillary position"),
            ("Maxillary Protrusion", 85, INF, "Maxilla is positioned anteriorly"),
        ],
    ),
    measurement(
        "SNB", "SNB Angle", "SNB",
        "Anteroposterior position of mandible relative to cranial base",
        _ANGLE, "°", ["S", "N", "B"], _K.ANGLE_3POINT, _M.SKELETAL_SAGITTAL,
        mean=80, std_dev=2,
        ranges=[
            ("Mandibular Retrusion", -INF, 77, "Mandible is positioned posteriorly (Class II tendency)"),
            ("Normal", 77, 83, "Normal mandibular position"),
            ("Mandibular Protrusion", 83, INF, "Mandible is positioned anteriorly (Class III tendency)"),
        ],
    ),
    # ANB 作为独立的三点角计算（无符号），不是 SNA - SNB 的算术结果
    measurement(
        "ANB", "ANB Angle", "ANB",
        "Skeletal relationship between maxilla and mandible",
        _ANGLE, "°", ["A", "N", "B"], _K.ANGLE_3POINT, _M.SKELETAL_SAGITTAL,
        mean=2, std_dev=2,
        ranges=[
            ("Class III", -INF, 0, "Skeletal Class III relationship"),
            ("Normal (Class I)", 0, 4, "Normal skeletal relationship"),
            ("Class II", 4, INF, "Skeletal Class II relationship"),
        ],
    ),
    # 点 A 到 B→U6 直线的距离；L6 参与完整性判断
    measurement(
        "WITS", "Wits Appraisal", "Wits",
        "Linear measurement of jaw relationship on occlusal plane",
        _LINEAR, "mm", ["A", "B", "U6", "L6"], _K.LINE_TO_POINT, _M.SKELETAL_SAGITTAL,
        mean=0, std_dev=2,
        ranges=[
            ("Class III", -INF, -2, "Skeletal Class III"),
            ("Normal", -2, 2, "Normal jaw relationship"),
            ("Class II", 2, INF, "Skeletal Class II"),
        ],
    ),

    # ==================== 骨性垂直向 ====================
    measurement(
        "FMA", "Frankfort Mandibular Plane Angle", "FMA",
        "Vertical growth pattern indicator",
        _ANGLE, "°", ["Po", "Or", "Me", "Go"], _K.ANGLE_2LINE, _M.SKELETAL_VERTICAL,
        mean=25, std_dev=4,
        ranges=[
            ("Horizontal Growth", -INF, 20, "Strong horizontal growth pattern"),
            ("Normal", 20, 30, "Normal vertical proportion"),
            ("Vertical Growth", 30, INF, "Vertical growth pattern (open bite tendency)"),
        ],
    ),
    measurement(
        "SN_MP", "SN-Mandibular Plane Angle", "SN-MP",
        "Mandibular plane angle to SN plane",
        _ANGLE, "°", ["S", "N", "Me", "Go"], _K.ANGLE_2LINE, _M.SKELETAL_VERTICAL,
        mean=32, std_dev=4,
        ranges=[
            ("Low Angle", -INF, 27, "Low mandibular plane angle"),
            ("Normal", 27, 37, "Normal mandibular plane angle"),
            ("High Angle", 37, INF, "High mandibular plane angle"),
        ],
    ),
    measurement(
        "Y_AXIS", "Y-Axis (Growth Axis)", "Y-Axis",
        "Direction of facial growth",
        _ANGLE, "°", ["S", "Gn", "Po", "Or"], _K.ANGLE_2LINE, _M.SKELETAL_VERTICAL,
        mean=59, std_dev=3,
        ranges=[
            ("Horizontal", -INF, 55, "Horizontal growth tendency"),
            ("Normal", 55, 63, "Average growth direction"),
            ("Vertical", 63, INF, "Vertical growth tendency"),
        ],
    ),
    measurement(
        "GONIAL", "Gonial Angle", "Gonial",
        "Angle at gonion between ramus and body of mandible",
        _ANGLE, "°", ["Ar", "Go", "Me"], _K.ANGLE_3POINT, _M.SKELETAL_VERTICAL,
        mean=130, std_dev=5,
        ranges=[
            ("Closed", -INF, 123, "Closed gonial angle (horizontal growth)"),
            ("Normal", 123, 137, "Normal gonial angle"),
            ("Open", 137, INF, "Open gonial angle (vertical growth)"),
        ],
    ),

    # ==================== 牙性 ====================
    # 两线夹角折叠到 [0, 90]，因此 U1-SN / IMPA / 切牙间角总是落在第一个区间
    measurement(
        "U1_SN", "Upper Incisor to SN", "U1-SN",
        "Inclination of upper incisor to SN plane",
        _ANGLE, "°", ["U1E", "U1A", "S", "N"], _K.ANGLE_2LINE, _M.DENTAL,
        mean=104, std_dev=5,
        ranges=[
            ("Retroclined", -INF, 97, "Upper incisors retroclined"),
            ("Normal", 97, 111, "Normal upper incisor inclination"),
            ("Proclined", 111, INF, "Upper incisors proclined"),
        ],
    ),
    measurement(
        "IMPA", "Lower Incisor to Mandibular Plane", "IMPA",
        "Inclination of lower incisor to mandibular plane",
        _ANGLE, "°", ["L1E", "L1A", "Me", "Go"], _K.ANGLE_2LINE, _M.DENTAL,
        mean=90, std_dev=5,
        ranges=[
            ("Retroclined", -INF, 83, "Lower incisors retroclined"),
            ("Normal", 83, 97, "Normal lower incisor inclination"),
            ("Proclined", 97, INF, "Lower incisors proclined"),
        ],
    ),
    measurement(
        "INTERINCISAL", "Interincisal Angle", "U1-L1",
        "Angle between upper and lower incisor axes",
        _ANGLE, "°", ["U1E", "U1A", "L1E", "L1A"], _K.ANGLE_2LINE, _M.DENTAL,
        mean=131, std_dev=6,
        ranges=[
            ("Decreased", -INF, 123, "Decreased interincisal angle (flared incisors)"),
            ("Normal", 123, 139, "Normal interincisal relationship"),
            ("Increased", 139, INF, "Increased interincisal angle (retruded incisors)"),
        ],
    ),
    measurement(
        "OVERJET", "Overjet", "OJ",
        "Horizontal distance between upper and lower incisors",
        _LINEAR, "mm", ["U1E", "L1E"], _K.LINEAR, _M.DENTAL,
        mean=2.5, std_dev=1,
        ranges=[
            ("Negative", -INF, 0, "Negative overjet (anterior crossbite)"),
            ("Normal", 0, 4, "Normal overjet"),
            ("Excessive", 4, INF, "Excessive overjet"),
        ],
    ),
    measurement(
        "OVERBITE", "Overbite", "OB",
        "Vertical overlap of incisors",
        _LINEAR, "mm", ["U1E", "L1E"], _K.LINEAR, _M.DENTAL,
        mean=2.5, std_dev=1,
        ranges=[
            ("Open Bite", -INF, 0, "Anterior open bite"),
            ("Normal", 0, 4, "Normal overbite"),
            ("Deep Bite", 4, INF, "Deep bite"),
        ],
    ),

    # ==================== 软组织 ====================
    measurement(
        "NASOLABIAL", "Nasolabial Angle", "NLA",
        "Angle between columella and upper lip",
        _ANGLE, "°", ["Prn", "Sn", "Ls"], _K.ANGLE_3POINT, _M.SOFT_TISSUE,
        mean=102, std_dev=8,
        ranges=[
            ("Acute", -INF, 90, "Acute nasolabial angle (protruded incisors)"),
            ("Normal", 90, 115, "Normal nasolabial angle"),
            ("Obtuse", 115, INF, "Obtuse nasolabial angle (retruded incisors)"),
        ],
    ),
    measurement(
        "E_LINE_UPPER", "Upper Lip to E-Line", "UL-E",
        "Distance from upper lip to Ricketts E-line",
        _LINEAR, "mm", ["Ls", "Prn", "Pgs"], _K.LINE_TO_POINT, _M.SOFT_TISSUE,
        mean=-4, std_dev=2,
        ranges=[
            ("Behind", -INF, -6, "Upper lip behind E-line (retrusive lip)"),
            ("Normal", -6, -2, "Normal upper lip position"),
            ("Ahead", -2, INF, "Upper lip ahead of E-line (protrusive lip)"),
        ],
    ),
    measurement(
        "E_LINE_LOWER", "Lower Lip to E-Line", "LL-E",
        "Distance from lower lip to Ricketts E-line",
        _LINEAR, "mm", ["Li", "Prn", "Pgs"], _K.LINE_TO_POINT, _M.SOFT_TISSUE,
        mean=-2, std_dev=2,
        ranges=[
            ("Behind", -INF, -4, "Lower lip behind E-line"),
            ("Normal", -4, 0, "Normal lower lip position"),
            ("Ahead", 0, INF, "Lower lip ahead of E-line"),
        ],
    ),
    measurement(
        "FACIAL_CONVEXITY", "Facial Convexity", "Convexity",
        "Soft tissue profile convexity",
        _ANGLE, "°", ["G", "Sn", "Pgs"], _K.ANGLE_3POINT, _M.SOFT_TISSUE,
        mean=12, std_dev=4,
        ranges=[
            ("Concave", -INF, 5, "Concave profile (Class III appearance)"),
            ("Straight", 5, 10, "Relatively straight profile"),
            ("Normal", 10, 18, "Normal convexity"),
            ("Convex", 18, INF, "Convex profile (Class II appearance)"),
        ],
    ),
)

MEASUREMENT_CATEGORY_ORDER: Tuple[MeasurementCategory, ...] = (
    _M.SKELETAL_SAGITTAL,
    _M.SKELETAL_VERTICAL,
    _M.DENTAL,
    _M.SOFT_TISSUE,
    _M.AIRWAY,
)

MEASUREMENT_CATEGORY_LABELS: Dict[MeasurementCategory, str] = {
    _M.SKELETAL_SAGITTAL: "Skeletal (Sagittal)",
    _M.SKELETAL_VERTICAL: "Skeletal (Vertical)",
    _M.DENTAL: "Dental",
    _M.SOFT_TISSUE: "Soft Tissue",
    _M.AIRWAY: "Airway",
}
