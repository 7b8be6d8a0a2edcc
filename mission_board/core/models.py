"""Data models for the mission board.

The models are implemented using :mod:`pydantic` so that records coming out of
a store are validated and can be written back without losing any field.  The
wire format keeps the camelCase names and the ``"Point <code>"`` area strings
used by the dashboard; inside Python everything is snake_case and areas are
:class:`AreaRef` values.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

POINT_PREFIX = "Point "


class MissionStatus(str, Enum):
    """Lifecycle states, in the only order a mission may go through them."""

    PENDING = "Pending"
    IN_QUEUE = "In queue"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @property
    def is_resolved(self) -> bool:
        """A resolved mission has both of its endpoints."""
        return self is not MissionStatus.PENDING


class MissionType(str, Enum):
    SEND = "Send"
    RECEIVE = "Receive"

    @property
    def opposite(self) -> MissionType:
        return MissionType.RECEIVE if self is MissionType.SEND else MissionType.SEND


class AreaRef(BaseModel):
    """Reference to a physical area such as ``A1``."""

    model_config = ConfigDict(frozen=True)

    area_code: str

    @field_validator("area_code")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("area code must not be empty")
        return value

    @classmethod
    def parse(cls, value: Any) -> AreaRef:
        """Build a reference from ``"Point A1"``, ``"A1"`` or a mapping."""
        if isinstance(value, AreaRef):
            return value
        if isinstance(value, str):
            if value.startswith(POINT_PREFIX):
                value = value[len(POINT_PREFIX) :]
            return cls(area_code=value)
        return cls.model_validate(value)

    def encode(self) -> str:
        return f"{POINT_PREFIX}{self.area_code}"

    def __str__(self) -> str:
        return self.area_code


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialise using the dashboard's field names."""
        return self.model_dump(mode="json", by_alias=True)


class Mission(_WireModel):
    """A single transport request between two areas.

    Attributes
    ----------
    id:
        Store-assigned identifier; never reused.
    type:
        Direction chosen by the creating panel. Never changes.
    start_point, destination:
        Endpoints. A pending mission carries only the creator's endpoint,
        the other one is written when a panel accepts it.
    created_by_panel_id:
        Optional only so that legacy records still load; the projector
        ignores missions without it.
    assigned_to_panel_id:
        Panel that accepted the mission.

    """

    id: int
    status: MissionStatus = MissionStatus.PENDING
    type: MissionType
    start_point: AreaRef | None = None
    destination: AreaRef | None = None
    cargo_type: str | None = None
    number_of_pieces: int | None = Field(default=None, gt=0)
    robot_name: str | None = None
    created_by_panel_id: str | None = None
    assigned_to_panel_id: str | None = None

    @field_validator("start_point", "destination", mode="before")
    @classmethod
    def _parse_area(cls, value: Any) -> AreaRef | None:
        if value is None or value == "":
            return None
        return AreaRef.parse(value)

    @field_serializer("start_point", "destination")
    def _encode_area(self, value: AreaRef | None) -> str | None:
        return value.encode() if value is not None else None

    @model_validator(mode="after")
    def _check_shape(self) -> Mission:
        if self.status is MissionStatus.PENDING:
            if self.start_point is not None and self.destination is not None:
                raise ValueError("a pending mission carries at most one endpoint")
            if self.assigned_to_panel_id is not None:
                raise ValueError("a pending mission cannot be assigned")
        elif self.start_point is None or self.destination is None:
            raise ValueError(f"a mission in status {self.status.value!r} needs both endpoints")
        return self

    def evolve(self, **changes: Any) -> Mission:
        """Return a validated copy with ``changes`` applied."""
        return type(self).model_validate({**self.model_dump(), **changes})

    @property
    def known_endpoint(self) -> AreaRef | None:
        """The endpoint the creator supplied while the mission is pending."""
        return self.start_point or self.destination


class PanelConfig(_WireModel):
    """Configuration of one operator panel."""

    user_id: str
    selected_areas: list[str] = Field(default_factory=list)
    send_to_locations: list[str] = Field(default_factory=list)
    receive_from_locations: list[str] = Field(default_factory=list)

    @field_validator("user_id")
    @classmethod
    def _require_user(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("userId is required")
        return value

    @field_validator("selected_areas", "send_to_locations", "receive_from_locations")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        # keep first occurrence order, drop ``Point`` prefixes
        seen: dict[str, None] = {}
        for item in value:
            seen.setdefault(AreaRef.parse(item).area_code, None)
        return list(seen)


class PanelMission(BaseModel):
    """A mission as one particular panel sees it."""

    model_config = ConfigDict(frozen=True)

    mission: Mission
    display_type: MissionType
    is_created_by_this_panel: bool
    shown_from: AreaRef | None = None
    shown_to: AreaRef | None = None
    from_label: str | None = None
    to_label: str | None = None

    @property
    def id(self) -> int:
        return self.mission.id

    @property
    def status(self) -> MissionStatus:
        return self.mission.status
