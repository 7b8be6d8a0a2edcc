"""Simple JSON-backed storage for missions and panels."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..adapters.base import MissionStore, PanelStore
from .models import Mission, PanelConfig

log = logging.getLogger(__name__)


def _write_atomic(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp, path)


def _record_id(item: Any) -> Any:
    return item.get("id") if isinstance(item, dict) else None


class JSONMissionStore(MissionStore):
    """Persist :class:`Mission` records to a single JSON file.

    The whole file is rewritten on every mutation.  Besides the missions it
    records the highest id ever handed out so that deleting the newest
    mission never frees its id for reuse.  Records that do not validate are
    hidden from callers but written back untouched.
    """

    def __init__(self, path: Path) -> None:
        """Initialise storage using JSON file at ``path``."""
        self.path = path
        self._missions: dict[int, Mission] = {}
        self._unparsed: list[Any] = []
        self._last_id = 0
        if path.exists():
            self._load()
        else:
            self._save()

    # ------------------------------------------------------------------
    # Internal helpers
    def _load(self) -> None:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        missions: dict[int, Mission] = {}
        unparsed: list[Any] = []
        for item in data.get("missions", []):
            try:
                mission = Mission.model_validate(item)
            except ValidationError as exc:
                log.warning("Skipping malformed mission record %r: %s", _record_id(item), exc)
                unparsed.append(item)
                continue
            missions[mission.id] = mission
        self._missions = missions
        self._unparsed = unparsed
        unparsed_ids = [i for i in map(_record_id, unparsed) if isinstance(i, int)]
        self._last_id = max(
            [int(data.get("lastId", 0)), *self._missions.keys(), *unparsed_ids], default=0
        )

    def _save(self) -> None:
        data = {
            "lastId": self._last_id,
            "missions": [m.to_wire() for m in self._missions.values()] + self._unparsed,
        }
        _write_atomic(self.path, data)

    # ------------------------------------------------------------------
    # MissionStore
    def get_all(self) -> list[Mission]:
        return list(self._missions.values())

    def get(self, mission_id: int) -> Mission | None:
        return self._missions.get(mission_id)

    def put(self, mission: Mission) -> None:
        # a valid record replaces an unreadable one with the same id
        self._unparsed = [r for r in self._unparsed if _record_id(r) != mission.id]
        self._missions[mission.id] = mission
        self._last_id = max(self._last_id, mission.id)
        self._save()

    def delete(self, mission_id: int) -> None:
        if self._missions.pop(mission_id, None) is not None:
            self._save()

    def allocate_id(self) -> int:
        self._last_id += 1
        self._save()
        return self._last_id


class JSONPanelStore(PanelStore):
    """Persist :class:`PanelConfig` records to a single JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._panels: dict[str, PanelConfig] = {}
        self._unparsed: list[Any] = []
        if path.exists():
            self._load()
        else:
            self._save()

    def _load(self) -> None:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        panels: dict[str, PanelConfig] = {}
        unparsed: list[Any] = []
        for item in data.get("panels", []):
            try:
                panel = PanelConfig.model_validate(item)
            except ValidationError as exc:
                log.warning("Skipping malformed panel record: %s", exc)
                unparsed.append(item)
                continue
            panels[panel.user_id] = panel
        self._panels = panels
        self._unparsed = unparsed

    def _save(self) -> None:
        records = [p.to_wire() for p in self._panels.values()] + self._unparsed
        _write_atomic(self.path, {"panels": records})

    def get_all(self) -> list[PanelConfig]:
        return list(self._panels.values())

    def get_by_user_id(self, user_id: str) -> PanelConfig | None:
        return self._panels.get(user_id)

    def put(self, config: PanelConfig) -> None:
        self._unparsed = [
            r for r in self._unparsed
            if not (isinstance(r, dict) and r.get("userId") == config.user_id)
        ]
        self._panels[config.user_id] = config
        self._save()

    def delete(self, user_id: str) -> None:
        if self._panels.pop(user_id, None) is not None:
            self._save()
