"""Mission state transitions.

``Pending -> In queue -> Active -> Completed``; cancelling deletes the mission
and is allowed while it is pending or queued.  The functions in this module
only compute the next version of a mission (or a :class:`Failure`); storing
the result is left to :class:`~mission_board.board.MissionBoard`.
"""

from __future__ import annotations

from pydantic import ValidationError

from ..core.areas import AreaCatalog
from ..core.models import AreaRef, Mission, MissionStatus, MissionType, PanelConfig
from .projector import role_for
from .results import Failure, NotFoundFailure, ValidationFailure

NEXT_STATUS = {
    MissionStatus.PENDING: MissionStatus.IN_QUEUE,
    MissionStatus.IN_QUEUE: MissionStatus.ACTIVE,
    MissionStatus.ACTIVE: MissionStatus.COMPLETED,
}


def _capable(
    catalog: AreaCatalog, area: str, role: MissionType, cargo_type: str | None
) -> bool:
    if role is MissionType.SEND:
        return catalog.can_send(area, cargo_type)
    return catalog.can_receive(area, cargo_type)


def _direction(role: MissionType) -> str:
    return "send" if role is MissionType.SEND else "receive"


def _selected_area(value: str | None) -> AreaRef | None:
    """Parse an area picked in a form; blank picks such as ``"Point "`` are ``None``."""
    if not value:
        return None
    try:
        return AreaRef.parse(value)
    except ValidationError:
        return None


def create_mission(
    mission_id: int,
    creator: PanelConfig,
    mission_type: MissionType | str,
    cargo_type: str | None,
    number_of_pieces: int | None,
    origin_area: str | None,
    catalog: AreaCatalog,
) -> Mission | Failure:
    """Build a new pending mission from the creating panel's own area.

    A *Send* mission leaves from ``origin_area``; a *Receive* mission is
    delivered to it.  The opposite endpoint stays empty until another panel
    accepts the mission.
    """
    try:
        mission_type = MissionType(mission_type)
    except ValueError:
        return ValidationFailure(f"Unknown mission type {mission_type!r}.")
    area = _selected_area(origin_area)
    if area is None:
        return ValidationFailure("Please select an area.")
    if area.area_code not in creator.selected_areas:
        return ValidationFailure(
            f"Area {area.area_code} is not one of panel {creator.user_id}'s areas."
        )
    if not _capable(catalog, area.area_code, mission_type, cargo_type):
        return ValidationFailure(
            f"Area {area.area_code} cannot {_direction(mission_type)} {cargo_type}."
        )
    if number_of_pieces is not None and number_of_pieces <= 0:
        return ValidationFailure("Number of pieces must be positive.")

    endpoint = "start_point" if mission_type is MissionType.SEND else "destination"
    return Mission(
        id=mission_id,
        status=MissionStatus.PENDING,
        type=mission_type,
        cargo_type=cargo_type,
        number_of_pieces=number_of_pieces,
        created_by_panel_id=creator.user_id,
        **{endpoint: area},
    )


def check_cancel(mission: Mission, panel_id: str) -> Failure | None:
    """Return why ``panel_id`` may not cancel ``mission``, or ``None``."""
    if mission.status is MissionStatus.PENDING:
        if mission.created_by_panel_id != panel_id:
            return ValidationFailure("Only the creating panel can cancel a pending mission.")
        return None
    if mission.status is MissionStatus.IN_QUEUE:
        if panel_id not in (mission.created_by_panel_id, mission.assigned_to_panel_id):
            return ValidationFailure("This mission belongs to other panels.")
        return None
    return ValidationFailure(f"A mission that is {mission.status.value} cannot be cancelled.")


def _creator_area(
    creator: PanelConfig, role: MissionType, cargo_type: str | None, catalog: AreaCatalog
) -> str | None:
    for area in creator.selected_areas:
        if _capable(catalog, area, role, cargo_type):
            return area
    return None


def accept(
    mission: Mission,
    role: MissionType,
    acceptor: PanelConfig,
    chosen_area: str | None,
    creator: PanelConfig | None,
    catalog: AreaCatalog,
    robot_name: str | None,
) -> Mission | Failure:
    """Accept a pending mission as ``role`` on behalf of ``acceptor``.

    The acceptor supplies its own endpoint from ``chosen_area``: the start
    point when sending, the destination when receiving.  The other endpoint
    is the one the creator stored; if the creator stored the opposite side
    instead, the creator's first origin area able to handle the cargo is
    used.
    """
    if mission.status is not MissionStatus.PENDING:
        return ValidationFailure("Only pending missions can be accepted.")
    if mission.assigned_to_panel_id is not None:
        return ValidationFailure("This mission was already accepted by another panel.")
    if mission.created_by_panel_id == acceptor.user_id:
        return ValidationFailure("A panel cannot accept its own mission.")
    if role_for(mission, acceptor) is not role:
        return ValidationFailure(
            f"Mission {mission.id} is not offered to panel {acceptor.user_id} as {role.value}."
        )

    cargo = mission.cargo_type
    candidates = [a for a in acceptor.selected_areas if _capable(catalog, a, role, cargo)]
    if not candidates:
        return ValidationFailure(f"No area of this panel can {_direction(role)} {cargo}.")
    chosen = _selected_area(chosen_area)
    if chosen is None:
        return ValidationFailure("Please select an area.")
    if chosen.area_code not in candidates:
        return ValidationFailure(f"Area {chosen.area_code} cannot {_direction(role)} {cargo}.")
    if robot_name is None:
        return ValidationFailure("No robot is available.")

    stored = mission.destination if role is MissionType.SEND else mission.start_point
    if stored is None:
        if creator is None:
            return NotFoundFailure(f"Panel {mission.created_by_panel_id} not found.")
        fallback = _creator_area(creator, role.opposite, cargo, catalog)
        if fallback is None:
            return ValidationFailure(
                f"Panel {creator.user_id} has no area that can "
                f"{_direction(role.opposite)} {cargo}."
            )
        stored = AreaRef.parse(fallback)

    if role is MissionType.SEND:
        start, destination = chosen, stored
    else:
        start, destination = stored, chosen
    return mission.evolve(
        status=MissionStatus.IN_QUEUE,
        start_point=start,
        destination=destination,
        robot_name=robot_name,
        assigned_to_panel_id=acceptor.user_id,
    )


def advance(mission: Mission, expected: MissionStatus) -> Mission | None:
    """Move a queued or active mission one step on.

    Returns ``None`` when ``mission`` is no longer in the ``expected`` status,
    which is how timers that fire late are recognised.
    """
    if mission.status is not expected or expected is MissionStatus.PENDING:
        return None
    following = NEXT_STATUS.get(expected)
    if following is None:
        return None
    return mission.evolve(status=following)
