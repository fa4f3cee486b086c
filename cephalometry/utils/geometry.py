# -*- coding: utf-8 -*-
"""
二维几何基础运算（图像像素坐标系）

所有函数都是纯函数：接收任何可按 (x, y) 索引的点（Point、tuple、np.ndarray），
退化输入（零长度向量 / 直线）返回约定的兜底值，不抛异常。
"""

from __future__ import annotations

from typing import NamedTuple, Sequence, Union

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


PointLike = Union[Point, Sequence[float], np.ndarray]


def _vec(p: PointLike) -> np.ndarray:
    return np.asarray((p[0], p[1]), dtype=float)


def distance(p1: PointLike, p2: PointLike) -> float:
    """两点欧氏距离"""
    return float(np.linalg.norm(_vec(p2) - _vec(p1)))


def _angle_between_vectors(v1: np.ndarray, v2: np.ndarray) -> float:
    """两个向量的夹角（0~180°）；任一向量长度为 0 时返回 0"""
    norm = np.linalg.norm(v1) * np.linalg.norm(v2)
    if norm == 0:
        return 0.0
    cos_theta = np.clip(np.dot(v1, v2) / norm, -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_theta)))


def angle_3point(p1: PointLike, p2: PointLike, p3: PointLike) -> float:
    """
    三点角：以 p2 为顶点，射线 p2→p1 与 p2→p3 的夹角

    Returns:
        float: 角度（0~180°）；p1 或 p3 与顶点重合时返回 0
    """
    vertex = _vec(p2)
    return _angle_between_vectors(_vec(p1) - vertex, _vec(p3) - vertex)


def angle_2line(p1: PointLike, p2: PointLike, p3: PointLike, p4: PointLike) -> float:
    """
    两线夹角：方向向量 p2-p1 与 p4-p3

    直线方向没有临床意义，结果大于 90° 时取补角，因此总在 [0, 90] 内。
    任一直线长度为 0 时返回 0。
    """
    angle = _angle_between_vectors(_vec(p2) - _vec(p1), _vec(p4) - _vec(p3))
    if angle > 90:
        angle = 180 - angle
    return angle


def point_to_line_distance(p: PointLike, line_p1: PointLike, line_p2: PointLike) -> float:
    """
    点到直线（过 line_p1、line_p2 的无限长直线）的有符号垂直距离

    符号由二维叉积决定，下游的解释区间依赖正负号（如唇位于 E 线前/后）。
    直线退化为一个点时，返回 p 到 line_p1 的距离。
    """
    start = _vec(line_p1)
    direction = _vec(line_p2) - start
    offset = _vec(p) - start

    length_sq = float(np.dot(direction, direction))
    if length_sq == 0:
        return distance(p, line_p1)

    cross = offset[0] * direction[1] - offset[1] * direction[0]
    return float(cross / np.sqrt(length_sq))


def project_point_on_line(p: PointLike, line_p1: PointLike, line_p2: PointLike) -> Point:
    """点在直线上的正交投影；直线退化时返回 line_p1"""
    start = _vec(line_p1)
    direction = _vec(line_p2) - start

    length_sq = float(np.dot(direction, direction))
    if length_sq == 0:
        return Point(float(start[0]), float(start[1]))

    t = float(np.dot(_vec(p) - start, direction)) / length_sq
    projected = start + t * direction
    return Point(float(projected[0]), float(projected[1]))
