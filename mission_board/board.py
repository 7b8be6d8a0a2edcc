"""Caller-facing mission operations.

:class:`MissionBoard` ties the stores, the area catalog and the timers to the
pure lifecycle and projection functions.  Every operation validates first and
writes the store once at the end, so a returned :class:`Failure` always means
nothing changed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .adapters.base import MissionStore, PanelStore
from .config import DEFAULT_ROBOTS
from .core.areas import AreaCatalog
from .core.models import Mission, MissionStatus, MissionType, PanelMission
from .engine import lifecycle
from .engine.dispatch import pick_robot
from .engine.projector import filter_by_status, project
from .engine.results import Failure, NotFoundFailure
from .engine.timers import AutoAdvancer, Clock, ManualClock

log = logging.getLogger(__name__)


class MissionBoard:
    """Create, accept, cancel and view missions across panels."""

    def __init__(
        self,
        missions: MissionStore,
        panels: PanelStore,
        catalog: AreaCatalog | None = None,
        clock: Clock | None = None,
        robots: Sequence[str] = DEFAULT_ROBOTS,
        queue_delay_ms: int = 5000,
        active_delay_ms: int = 10000,
    ) -> None:
        self.missions = missions
        self.panels = panels
        self.catalog = catalog if catalog is not None else AreaCatalog()
        self.robots = tuple(robots)
        self.timers = AutoAdvancer(
            self, clock or ManualClock(), queue_delay_ms, active_delay_ms
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def project_for_panel(
        self, panel_id: str, status: MissionStatus | None = None
    ) -> list[PanelMission] | Failure:
        """Return the missions ``panel_id`` can see, optionally one tab only."""
        panel = self.panels.get_by_user_id(panel_id)
        if panel is None:
            return NotFoundFailure(f"Panel {panel_id} not found.")
        view = project(self.missions.get_all(), panel, self.catalog)
        if status is not None:
            view = filter_by_status(view, status)
        return view

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def create_mission(
        self,
        panel_id: str,
        mission_type: MissionType | str,
        cargo_type: str | None,
        number_of_pieces: int | None,
        origin_area: str | None,
    ) -> Mission | Failure:
        creator = self.panels.get_by_user_id(panel_id)
        if creator is None:
            return NotFoundFailure(f"Panel {panel_id} not found.")
        # validate against a placeholder id so a rejected request burns no id
        draft = lifecycle.create_mission(
            0, creator, mission_type, cargo_type, number_of_pieces, origin_area, self.catalog
        )
        if isinstance(draft, Failure):
            return draft
        mission = draft.evolve(id=self.missions.allocate_id())
        self.missions.put(mission)
        log.info("Panel %s created %s mission %s", panel_id, mission.type.value, mission.id)
        return mission

    def cancel_mission(self, mission_id: int, panel_id: str) -> Failure | None:
        mission = self.missions.get(mission_id)
        if mission is None:
            return NotFoundFailure(f"Mission {mission_id} not found.")
        err = lifecycle.check_cancel(mission, panel_id)
        if err:
            return err
        self.timers.forget(mission_id)
        self.missions.delete(mission_id)
        log.info("Panel %s cancelled mission %s", panel_id, mission_id)
        return None

    def accept_as_send(
        self, mission_id: int, panel_id: str, chosen_area: str | None, robot_name: str | None = None
    ) -> Mission | Failure:
        return self._accept(mission_id, panel_id, chosen_area, MissionType.SEND, robot_name)

    def accept_as_receive(
        self, mission_id: int, panel_id: str, chosen_area: str | None, robot_name: str | None = None
    ) -> Mission | Failure:
        return self._accept(mission_id, panel_id, chosen_area, MissionType.RECEIVE, robot_name)

    def _accept(
        self,
        mission_id: int,
        panel_id: str,
        chosen_area: str | None,
        role: MissionType,
        robot_name: str | None,
    ) -> Mission | Failure:
        mission = self.missions.get(mission_id)
        if mission is None:
            return NotFoundFailure(f"Mission {mission_id} not found.")
        acceptor = self.panels.get_by_user_id(panel_id)
        if acceptor is None:
            return NotFoundFailure(f"Panel {panel_id} not found.")
        creator = None
        if mission.created_by_panel_id is not None:
            creator = self.panels.get_by_user_id(mission.created_by_panel_id)
        robot = robot_name or pick_robot(self.robots, self.missions.get_all())

        result = lifecycle.accept(
            mission, role, acceptor, chosen_area, creator, self.catalog, robot
        )
        if isinstance(result, Failure):
            return result
        self.missions.put(result)
        self.timers.watch(result)
        log.info(
            "Panel %s accepted mission %s as %s (%s -> %s, robot %s)",
            panel_id,
            mission_id,
            role.value,
            result.start_point,
            result.destination,
            result.robot_name,
        )
        return result

    def advance(self, mission_id: int, expected: MissionStatus) -> Mission | None:
        """Apply a timer firing; ``None`` when the timer is stale."""
        mission = self.missions.get(mission_id)
        if mission is None:
            return None
        updated = lifecycle.advance(mission, expected)
        if updated is None:
            return None
        self.missions.put(updated)
        log.info("Mission %s is now %s", mission_id, updated.status.value)
        return updated

    def resume_timers(self) -> int:
        """Arm timers for queued and active missions found in the store."""
        return self.timers.resume(self.missions.get_all())
