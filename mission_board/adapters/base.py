"""Store interfaces the mission board is written against."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.models import Mission, PanelConfig


class MissionStore(ABC):
    """Holds every mission of the system, independent of any panel."""

    @abstractmethod
    def get_all(self) -> list[Mission]:
        """Return all stored missions in insertion order."""

    @abstractmethod
    def get(self, mission_id: int) -> Mission | None:
        """Return the mission with ``mission_id`` if present."""

    @abstractmethod
    def put(self, mission: Mission) -> None:
        """Insert ``mission`` or replace the stored one with the same id."""

    @abstractmethod
    def delete(self, mission_id: int) -> None:
        """Remove the mission; unknown ids are ignored."""

    @abstractmethod
    def allocate_id(self) -> int:
        """Return a fresh mission id that has never been handed out."""


class PanelStore(ABC):
    """Registry of panel configurations keyed by ``user_id``."""

    @abstractmethod
    def get_all(self) -> list[PanelConfig]:
        """Return every registered panel."""

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> PanelConfig | None:
        """Return the panel registered under ``user_id``."""

    @abstractmethod
    def put(self, config: PanelConfig) -> None:
        """Create or replace the panel with ``config.user_id``."""

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove the panel registered under ``user_id``."""
