# -*- coding: utf-8 -*-
"""公共测试数据"""

import pytest

from cephalometry.catalogue import PlacedLandmark

# S=(100,100), N=(150,50), A=(140,140), B=(130,160)
# SNA ≈ 38.66°, SNB ≈ 34.70°, ANB ≈ 3.96°
SCENARIO_POINTS = {
    "S": (100.0, 100.0),
    "N": (150.0, 50.0),
    "A": (140.0, 140.0),
    "B": (130.0, 160.0),
}


@pytest.fixture
def scenario_landmarks():
    return [PlacedLandmark(lid, x, y) for lid, (x, y) in SCENARIO_POINTS.items()]


@pytest.fixture
def scenario_records():
    return [{"landmarkId": lid, "x": x, "y": y} for lid, (x, y) in SCENARIO_POINTS.items()]
