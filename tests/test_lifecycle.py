"""Tests for the pure mission transitions."""

from __future__ import annotations

import pytest

from mission_board.core.models import Mission, MissionStatus, MissionType, PanelConfig
from mission_board.engine import lifecycle
from mission_board.engine.projector import project
from mission_board.engine.results import NotFoundFailure, ValidationFailure


def test_create_send_fills_start_point(p1, catalog):
    mission = lifecycle.create_mission(1, p1, "Send", "boxes", 4, "A1", catalog)
    assert isinstance(mission, Mission)
    assert mission.status is MissionStatus.PENDING
    assert mission.start_point.area_code == "A1"
    assert mission.destination is None
    assert mission.created_by_panel_id == "P1"
    assert mission.assigned_to_panel_id is None
    assert mission.number_of_pieces == 4


def test_create_receive_fills_destination(p1, catalog):
    mission = lifecycle.create_mission(2, p1, MissionType.RECEIVE, "pallets", None, "A1", catalog)
    assert mission.destination.area_code == "A1"
    assert mission.start_point is None


@pytest.mark.parametrize(
    ("mission_type", "cargo", "pieces", "area", "message"),
    [
        ("Fly", "boxes", None, "A1", "Unknown mission type"),
        ("Send", "boxes", None, None, "Please select an area."),
        ("Send", "boxes", None, "  ", "Please select an area."),
        ("Send", "boxes", None, "Point ", "Please select an area."),
        ("Send", "boxes", None, "B1", "is not one of panel P1's areas"),
        ("Send", "pallets", None, "A1", "cannot send pallets"),
        ("Receive", "boxes", None, "A1", "cannot receive boxes"),
        ("Send", "boxes", -1, "A1", "must be positive"),
    ],
)
def test_create_rejects_bad_input(p1, catalog, mission_type, cargo, pieces, area, message):
    result = lifecycle.create_mission(1, p1, mission_type, cargo, pieces, area, catalog)
    assert isinstance(result, ValidationFailure)
    assert message in str(result)


def test_accept_as_receive_supplies_destination(p1, p2, catalog):
    mission = lifecycle.create_mission(1, p1, "Send", "boxes", None, "A1", catalog)
    accepted = lifecycle.accept(
        mission, MissionType.RECEIVE, p2, "X1", p1, catalog, robot_name="AMR-01"
    )
    assert accepted.status is MissionStatus.IN_QUEUE
    assert accepted.start_point.area_code == "A1"
    assert accepted.destination.area_code == "X1"
    assert accepted.assigned_to_panel_id == "P2"
    assert accepted.robot_name == "AMR-01"
    assert accepted.type is MissionType.SEND
    # the original is left alone
    assert mission.status is MissionStatus.PENDING


def test_accept_as_send_supplies_start_point(p1, p2, catalog):
    mission = lifecycle.create_mission(1, p1, "Receive", "pallets", None, "A1", catalog)
    accepted = lifecycle.accept(mission, MissionType.SEND, p2, "X1", p1, catalog, "AMR-02")
    assert accepted.start_point.area_code == "X1"
    assert accepted.destination.area_code == "A1"
    assert accepted.type is MissionType.RECEIVE


def test_crossed_receive_uses_creator_origin_area(p1, catalog):
    """A pending Send that stored its destination gets the creator's area as start."""
    mission = Mission(
        id=5, type="Send", destination="B1", cargo_type="boxes", created_by_panel_id="P1"
    )
    acceptor = PanelConfig(user_id="P4", selected_areas=["C1"], receive_from_locations=["B1"])
    accepted = lifecycle.accept(mission, MissionType.RECEIVE, acceptor, "C1", p1, catalog, "MiR-100")
    assert accepted.start_point.area_code == "A1"
    assert accepted.destination.area_code == "C1"


def test_crossed_send_uses_creator_origin_area(p1, catalog):
    mission = Mission(id=6, type="Receive", start_point="X1", created_by_panel_id="P1")
    acceptor = PanelConfig(user_id="P5", selected_areas=["C1"], send_to_locations=["X1"])
    accepted = lifecycle.accept(mission, MissionType.SEND, acceptor, "C1", p1, catalog, "MiR-100")
    assert accepted.start_point.area_code == "C1"
    assert accepted.destination.area_code == "A1"


def test_crossed_accept_drops_out_of_the_acceptors_view(p1, catalog):
    """The acceptor sees resolved missions only through its own area lists.

    X1 was replaced by the creator's area, so nothing ties P5 to the result
    any more; the creator still sees it.
    """
    mission = Mission(id=6, type="Receive", start_point="X1", created_by_panel_id="P1")
    acceptor = PanelConfig(user_id="P5", selected_areas=["C1"], send_to_locations=["X1"])
    accepted = lifecycle.accept(mission, MissionType.SEND, acceptor, "C1", p1, catalog, "MiR-100")
    assert accepted.assigned_to_panel_id == "P5"
    assert project([accepted], acceptor, catalog) == []
    assert [pm.id for pm in project([accepted], p1, catalog)] == [6]


def test_crossed_accept_fails_when_creator_cannot_handle_cargo(p1, catalog):
    mission = Mission(
        id=6, type="Receive", start_point="X1", cargo_type="boxes", created_by_panel_id="P1"
    )
    acceptor = PanelConfig(user_id="P5", selected_areas=["C1"], send_to_locations=["X1"])
    result = lifecycle.accept(mission, MissionType.SEND, acceptor, "C1", p1, catalog, "MiR-100")
    assert isinstance(result, ValidationFailure)
    assert "P1 has no area that can receive boxes" in str(result)


def test_crossed_accept_needs_creator_panel(catalog):
    mission = Mission(id=6, type="Receive", start_point="X1", created_by_panel_id="gone")
    acceptor = PanelConfig(user_id="P5", selected_areas=["C1"], send_to_locations=["X1"])
    result = lifecycle.accept(mission, MissionType.SEND, acceptor, "C1", None, catalog, "MiR-100")
    assert isinstance(result, NotFoundFailure)


def test_accept_rejections(p1, p2, p3, catalog):
    mission = lifecycle.create_mission(1, p1, "Send", "boxes", None, "A1", catalog)

    def attempt(role, panel, area, robot="AMR-01", target=mission):
        return lifecycle.accept(target, role, panel, area, p1, catalog, robot)

    # not offered in that role, or not offered at all
    assert "not offered" in str(attempt(MissionType.SEND, p2, "X1"))
    assert "not offered" in str(attempt(MissionType.RECEIVE, p3, "C1"))
    # own mission
    assert "its own mission" in str(attempt(MissionType.RECEIVE, p1, "A1"))
    # area selection
    assert str(attempt(MissionType.RECEIVE, p2, None)) == "Please select an area."
    assert str(attempt(MissionType.RECEIVE, p2, "  ")) == "Please select an area."
    assert str(attempt(MissionType.RECEIVE, p2, "Point ")) == "Please select an area."
    assert "X2 cannot receive boxes" in str(attempt(MissionType.RECEIVE, p2, "X2"))
    assert "cannot receive boxes" in str(attempt(MissionType.RECEIVE, p2, "A1"))
    # no robot
    assert "No robot" in str(attempt(MissionType.RECEIVE, p2, "X1", robot=None))

    accepted = attempt(MissionType.RECEIVE, p2, "X1")
    assert "Only pending" in str(attempt(MissionType.RECEIVE, p2, "X1", target=accepted))


def test_accept_without_candidate_areas(p1, catalog):
    mission = lifecycle.create_mission(1, p1, "Send", "boxes", None, "A1", catalog)
    acceptor = PanelConfig(user_id="P6", selected_areas=["X2"], receive_from_locations=["A1"])
    result = lifecycle.accept(mission, MissionType.RECEIVE, acceptor, "X2", p1, catalog, "AMR-01")
    assert isinstance(result, ValidationFailure)
    assert str(result) == "No area of this panel can receive boxes."


def test_cancel_rules(p1, p2, catalog):
    pending = lifecycle.create_mission(1, p1, "Send", "boxes", None, "A1", catalog)
    assert lifecycle.check_cancel(pending, "P1") is None
    assert isinstance(lifecycle.check_cancel(pending, "P2"), ValidationFailure)

    queued = lifecycle.accept(pending, MissionType.RECEIVE, p2, "X1", p1, catalog, "AMR-01")
    assert lifecycle.check_cancel(queued, "P1") is None
    assert lifecycle.check_cancel(queued, "P2") is None
    assert isinstance(lifecycle.check_cancel(queued, "P3"), ValidationFailure)

    active = lifecycle.advance(queued, MissionStatus.IN_QUEUE)
    assert isinstance(lifecycle.check_cancel(active, "P1"), ValidationFailure)


def test_advance_follows_the_lifecycle_order(p1, p2, catalog):
    pending = lifecycle.create_mission(1, p1, "Send", "boxes", None, "A1", catalog)
    assert lifecycle.advance(pending, MissionStatus.PENDING) is None

    queued = lifecycle.accept(pending, MissionType.RECEIVE, p2, "X1", p1, catalog, "AMR-01")
    assert lifecycle.advance(queued, MissionStatus.ACTIVE) is None

    active = lifecycle.advance(queued, MissionStatus.IN_QUEUE)
    assert active.status is MissionStatus.ACTIVE
    assert active.model_dump(exclude={"status"}) == queued.model_dump(exclude={"status"})

    completed = lifecycle.advance(active, MissionStatus.ACTIVE)
    assert completed.status is MissionStatus.COMPLETED
    assert lifecycle.advance(completed, MissionStatus.COMPLETED) is None
    assert lifecycle.advance(completed, MissionStatus.ACTIVE) is None
