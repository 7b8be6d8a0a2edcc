"""Shared fixtures: three panels around a handful of areas."""

from __future__ import annotations

import pytest

from mission_board.board import MissionBoard
from mission_board.core.areas import AreaCatalog, AreaProfile
from mission_board.core.models import PanelConfig
from mission_board.core.storage import JSONMissionStore, JSONPanelStore
from mission_board.engine.timers import ManualClock


@pytest.fixture()
def catalog() -> AreaCatalog:
    return AreaCatalog(
        [
            AreaProfile(code="A1", name="Assembly", send_cargo={"boxes"}, receive_cargo={"pallets"}),
            AreaProfile(code="B1", receive_cargo={"boxes"}),
            AreaProfile(code="X1", send_cargo={"pallets"}, receive_cargo={"boxes"}),
            AreaProfile(code="X2", receive_cargo={"pallets"}),
            AreaProfile(code="C1", send_cargo={"boxes"}, receive_cargo={"boxes"}),
        ]
    )


@pytest.fixture()
def p1() -> PanelConfig:
    return PanelConfig(
        user_id="P1", selected_areas=["A1"], send_to_locations=["B1"], receive_from_locations=["X1"]
    )


@pytest.fixture()
def p2() -> PanelConfig:
    return PanelConfig(
        user_id="P2",
        selected_areas=["X1", "X2"],
        send_to_locations=["A1"],
        receive_from_locations=["A1"],
    )


@pytest.fixture()
def p3() -> PanelConfig:
    return PanelConfig(
        user_id="P3", selected_areas=["C1"], send_to_locations=["C1"], receive_from_locations=["C1"]
    )


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def board(tmp_path, catalog, clock, p1, p2, p3) -> MissionBoard:
    panels = JSONPanelStore(tmp_path / "panels.json")
    for panel in (p1, p2, p3):
        panels.put(panel)
    return MissionBoard(
        missions=JSONMissionStore(tmp_path / "missions.json"),
        panels=panels,
        catalog=catalog,
        clock=clock,
    )
