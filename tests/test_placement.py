# -*- coding: utf-8 -*-
"""工具状态与画布指针事件"""

import pytest

from cephalometry.placement import (
    MAX_ZOOM,
    MIN_ZOOM,
    AnalysisSession,
    CephTool,
    LandmarkCanvas,
    ToolState,
)


@pytest.fixture
def session():
    return AnalysisSession("img-1", "patient-1", "clinic-1")


@pytest.fixture
def canvas(session):
    return LandmarkCanvas(session)


def test_zoom_is_clamped():
    state = ToolState()
    for _ in range(30):
        state.zoom_in()
    assert state.zoom_level == MAX_ZOOM
    for _ in range(30):
        state.zoom_out()
    assert state.zoom_level == MIN_ZOOM

    state.pan_by(5, 5)
    state.reset_view()
    assert state.zoom_level == 1.0
    assert state.pan_offset == (0.0, 0.0)


def test_coordinate_transforms_are_inverse():
    state = ToolState(zoom_level=2.0)
    state.pan_by(10, -20)
    assert state.screen_to_image((210, 80)) == (100.0, 50.0)
    assert state.image_to_screen((100, 50)) == (210.0, 80.0)


def test_leaving_place_tool_clears_queue():
    state = ToolState()
    state.set_tool("PLACE")
    state.placing_landmark_id = "S"
    state.set_tool(CephTool.PLACE)
    assert state.placing_landmark_id == "S"
    state.set_tool(CephTool.SELECT)
    assert state.placing_landmark_id is None


def test_toggles_and_to_dict():
    state = ToolState()
    state.toggle_labels()
    state.toggle_lines()
    state.toggle_measurements()
    data = state.to_dict()
    assert data["activeTool"] == "SELECT"
    assert (data["showLabels"], data["showLines"], data["showMeasurements"]) == (False, False, False)


def test_place_tool_places_in_image_coordinates(session, canvas):
    session.set_tool(CephTool.PLACE)
    session.queue_landmark("S")
    session.tool_state.zoom_level = 2.0
    session.pan(10, 10)

    canvas.pointer_down(210, 110)

    placed = session.get_landmark("S")
    assert (placed.x, placed.y) == (100.0, 50.0)
    assert session.tool_state.placing_landmark_id == "N"


def test_place_tool_without_queue_does_nothing(session, canvas):
    session.set_tool(CephTool.PLACE)
    canvas.pointer_down(50, 50)
    assert session.landmarks == []


def test_select_and_drag_landmark(session, canvas):
    session.place_landmark("S", 100, 100)
    session.set_tool(CephTool.SELECT)

    canvas.pointer_down(108, 100)
    assert session.tool_state.selected_landmark_id == "S"

    canvas.pointer_move(130, 140)
    canvas.pointer_up()
    assert (session.get_landmark("S").x, session.get_landmark("S").y) == (130.0, 140.0)
    assert not canvas.is_dragging


def test_hit_radius_scales_with_zoom(session, canvas):
    session.place_landmark("S", 100, 100)
    session.tool_state.zoom_level = 4.0
    # 12 屏幕像素 = 3 图像像素
    assert canvas.find_landmark_at(400 + 11, 400) == "S"
    assert canvas.find_landmark_at(400 + 13, 400) is None


def test_select_drag_on_empty_canvas_pans(session, canvas):
    canvas.pointer_down(500, 500)
    assert session.tool_state.selected_landmark_id is None
    canvas.pointer_move(505, 510)
    assert session.tool_state.pan_offset == (5.0, 10.0)


def test_pointer_move_without_press_is_ignored(session, canvas):
    session.set_tool(CephTool.PAN)
    canvas.pointer_move(50, 50)
    assert session.tool_state.pan_offset == (0.0, 0.0)

    canvas.pointer_down(50, 50)
    canvas.pointer_move(40, 45)
    assert session.tool_state.pan_offset == (-10.0, -5.0)


def test_calibrate_tool_collects_two_points(session, canvas):
    session.start_calibration()
    canvas.pointer_down(0, 0)
    assert session.pending_calibration is None

    canvas.pointer_down(100, 0)
    assert session.pending_calibration == ((0.0, 0.0), (100.0, 0.0))
    assert session.tool_state.active_tool is CephTool.SELECT

    assert session.confirm_calibration(standard=10) == pytest.approx(10.0)


def test_leaving_calibrate_discards_first_click(session, canvas):
    session.start_calibration()
    canvas.pointer_down(0, 0)
    session.set_tool(CephTool.SELECT)
    assert session.tool_state.calibration_anchor is None

    session.start_calibration()
    canvas.pointer_down(500, 500)
    assert session.pending_calibration is None

    canvas.pointer_down(600, 500)
    assert session.pending_calibration == ((500.0, 500.0), (600.0, 500.0))


def test_restarting_calibration_discards_first_click(session, canvas):
    session.start_calibration()
    canvas.pointer_down(0, 0)
    session.start_calibration()
    canvas.pointer_down(50, 50)
    assert session.pending_calibration is None
