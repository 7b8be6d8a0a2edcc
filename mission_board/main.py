from __future__ import annotations

import argparse

from .adapters.base import PanelStore
from .adapters.panel_api import HttpPanelStore
from .board import MissionBoard
from .config import Settings, load_settings
from .core.areas import AreaCatalog
from .core.models import MissionStatus
from .core.storage import JSONMissionStore, JSONPanelStore
from .engine.projector import status_caption
from .engine.results import Failure
from .engine.timers import Clock
from .logging_config import setup_logging


def build_board(settings: Settings, clock: Clock | None = None) -> MissionBoard:
    """Wire stores and catalog from ``settings``.

    Pass an :class:`AsyncioClock` from inside a running loop to have queued
    missions advance on their own; without one the board only moves when a
    caller drives its :class:`ManualClock`, which is all the read-only CLI
    needs.
    """
    panels: PanelStore
    if settings.panel_api_url:
        panels = HttpPanelStore(settings.panel_api_url, settings.panel_api_token)
    else:
        panels = JSONPanelStore(settings.panels_path)
    return MissionBoard(
        missions=JSONMissionStore(settings.missions_path),
        panels=panels,
        catalog=AreaCatalog.load(settings.areas_path),
        clock=clock,
        robots=settings.robots,
        queue_delay_ms=settings.queue_delay_ms,
        active_delay_ms=settings.active_delay_ms,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show the missions one panel can see.")
    parser.add_argument("panel_id")
    parser.add_argument(
        "--status",
        choices=[s.value for s in MissionStatus],
        help="only show one tab (Pending also lists queued missions)",
    )
    args = parser.parse_args(argv)

    log = setup_logging()
    try:
        settings = load_settings()
    except ValueError as exc:
        log.error("%s", exc)
        return 2
    board = build_board(settings)
    status = MissionStatus(args.status) if args.status else None
    view = board.project_for_panel(args.panel_id, status)
    if isinstance(view, Failure):
        log.error("%s", view)
        return 2

    if not view:
        print("No missions found.")
    for pm in view:
        route = f"{pm.from_label or '?'} -> {pm.to_label or '?'}"
        robot = f" [{pm.mission.robot_name}]" if pm.mission.robot_name else ""
        print(
            f"#{pm.id} {status_caption(pm.status):<10} {pm.display_type.value:<8} "
            f"{route}{robot}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
