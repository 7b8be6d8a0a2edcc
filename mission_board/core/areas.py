"""Cargo capabilities and display names of physical areas."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field

from .models import AreaRef

log = logging.getLogger(__name__)


class AreaProfile(BaseModel):
    """What one area may ship out and take in.

    Attributes
    ----------
    code:
        Bare area code, e.g. ``"A1"``.
    name:
        Optional operator-facing name shown instead of the code.
    send_cargo:
        Cargo labels that can leave this area.
    receive_cargo:
        Cargo labels this area can take in.

    """

    code: str
    name: str | None = None
    send_cargo: set[str] = Field(default_factory=set)
    receive_cargo: set[str] = Field(default_factory=set)


class AreaCatalog:
    """Read-only lookup of :class:`AreaProfile` records by area code."""

    def __init__(self, profiles: Iterable[AreaProfile] = ()) -> None:
        self._profiles: dict[str, AreaProfile] = {p.code: p for p in profiles}

    @classmethod
    def load(cls, path: Path) -> AreaCatalog:
        """Load profiles from a JSON file; a missing file gives an empty catalog."""
        if not path.exists():
            log.debug("No area catalog at %s", path)
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(AreaProfile(**item) for item in data.get("areas", []))

    def get(self, area: AreaRef | str) -> AreaProfile | None:
        return self._profiles.get(AreaRef.parse(area).area_code)

    def can_send(self, area: AreaRef | str, cargo_type: str | None) -> bool:
        if cargo_type is None:
            return True
        profile = self.get(area)
        return profile is not None and cargo_type in profile.send_cargo

    def can_receive(self, area: AreaRef | str, cargo_type: str | None) -> bool:
        if cargo_type is None:
            return True
        profile = self.get(area)
        return profile is not None and cargo_type in profile.receive_cargo

    def label(self, area: AreaRef | str | None) -> str | None:
        """Return the custom name of ``area`` or its bare code."""
        if area is None:
            return None
        ref = AreaRef.parse(area)
        profile = self._profiles.get(ref.area_code)
        if profile is not None and profile.name:
            return profile.name
        return ref.area_code

    @property
    def cargo_types(self) -> set[str]:
        labels: set[str] = set()
        for profile in self._profiles.values():
            labels |= profile.send_cargo | profile.receive_cargo
        return labels

    def __len__(self) -> int:
        return len(self._profiles)
