"""Robot selection for accepted missions."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from ..core.models import Mission, MissionStatus

_BUSY = {MissionStatus.IN_QUEUE, MissionStatus.ACTIVE}


def pick_robot(fleet: Sequence[str], missions: Iterable[Mission]) -> str | None:
    """Return the least busy robot of ``fleet``.

    A robot is busy with every queued or active mission carrying its name.
    Ties go to the robot listed first, so the choice is deterministic.
    """
    if not fleet:
        return None
    load: Counter[str] = Counter(
        m.robot_name for m in missions if m.status in _BUSY and m.robot_name
    )
    return min(fleet, key=lambda name: (load[name], fleet.index(name)))
