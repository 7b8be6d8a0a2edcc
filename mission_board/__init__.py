"""Core package for the mission board.

Panels create transport missions, other panels accept them, and every panel
sees the shared mission list from its own side.  This module exposes the
models, the stores and :class:`MissionBoard` so that consumers can import
them straight from ``mission_board``.
"""

from .board import MissionBoard
from .core.areas import AreaCatalog, AreaProfile
from .core.models import AreaRef, Mission, MissionStatus, MissionType, PanelConfig, PanelMission
from .core.storage import JSONMissionStore, JSONPanelStore
from .engine.results import Failure, NotFoundFailure, ValidationFailure

__all__ = [
    "AreaCatalog",
    "AreaProfile",
    "AreaRef",
    "Failure",
    "JSONMissionStore",
    "JSONPanelStore",
    "Mission",
    "MissionBoard",
    "MissionStatus",
    "MissionType",
    "NotFoundFailure",
    "PanelConfig",
    "PanelMission",
    "ValidationFailure",
]
