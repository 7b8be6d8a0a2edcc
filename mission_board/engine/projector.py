"""Per-panel views of the shared mission list.

Missions are stored once, without any notion of which panel is looking at
them.  :func:`project` derives, for one panel, which missions it can see,
whether each one shows up as a *Send* or a *Receive*, and which endpoints
the panel gets to see.  Nothing here writes to a mission; only the lifecycle
fills in endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.areas import AreaCatalog
from ..core.models import AreaRef, Mission, MissionStatus, MissionType, PanelConfig, PanelMission

log = logging.getLogger(__name__)

_CAPTIONS = {
    MissionStatus.PENDING: "Ordered",
    MissionStatus.IN_QUEUE: "Departure",
}


def role_for(mission: Mission, panel: PanelConfig) -> MissionType | None:
    """Return how ``mission`` appears on ``panel``, or ``None`` if hidden."""
    creator = mission.created_by_panel_id
    if creator is None:
        return None

    panel_id = panel.user_id
    is_creator = creator == panel_id
    assignee = mission.assigned_to_panel_id
    if assignee is not None and assignee != panel_id and not is_creator:
        return None

    if is_creator:
        return mission.type

    if mission.status.is_resolved:
        # the acceptor's role is recovered from its own area lists
        start = mission.start_point.area_code if mission.start_point else None
        destination = mission.destination.area_code if mission.destination else None
        if start in panel.receive_from_locations:
            return MissionType.RECEIVE
        if destination in panel.send_to_locations:
            return MissionType.SEND
        return None

    known = mission.known_endpoint
    if assignee is not None or known is None:
        return None
    if mission.type is MissionType.SEND and known.area_code in panel.receive_from_locations:
        return MissionType.RECEIVE
    if mission.type is MissionType.RECEIVE and known.area_code in panel.send_to_locations:
        return MissionType.SEND
    return None


def shown_endpoints(
    mission: Mission, display_type: MissionType, is_creator: bool
) -> tuple[AreaRef | None, AreaRef | None]:
    """Return the ``(from, to)`` pair a panel should display.

    A pending mission offered to another panel only reveals the creator's
    endpoint; the other side is the one the accepting panel will supply.
    """
    if mission.status.is_resolved or is_creator:
        return mission.start_point, mission.destination
    known = mission.known_endpoint
    if display_type is MissionType.RECEIVE:
        return known, None
    return None, known


def project(
    missions: Iterable[Mission],
    panel: PanelConfig,
    catalog: AreaCatalog | None = None,
) -> list[PanelMission]:
    """Compute the missions visible to ``panel``, in store order."""
    if catalog is None:
        catalog = AreaCatalog()
    visible: list[PanelMission] = []
    for mission in missions:
        if mission.created_by_panel_id is None:
            log.debug("Ignoring mission %s without a creating panel", mission.id)
            continue
        display_type = role_for(mission, panel)
        if display_type is None:
            continue
        is_creator = mission.created_by_panel_id == panel.user_id
        shown_from, shown_to = shown_endpoints(mission, display_type, is_creator)
        visible.append(
            PanelMission(
                mission=mission,
                display_type=display_type,
                is_created_by_this_panel=is_creator,
                shown_from=shown_from,
                shown_to=shown_to,
                from_label=catalog.label(shown_from),
                to_label=catalog.label(shown_to),
            )
        )
    return visible


def filter_by_status(
    panel_missions: Iterable[PanelMission], status: MissionStatus
) -> list[PanelMission]:
    """Select one dashboard tab; the Pending tab also lists queued missions."""
    if status is MissionStatus.PENDING:
        wanted = {MissionStatus.PENDING, MissionStatus.IN_QUEUE}
    else:
        wanted = {status}
    return [pm for pm in panel_missions if pm.status in wanted]


def status_caption(status: MissionStatus) -> str:
    return _CAPTIONS.get(status, status.value)
