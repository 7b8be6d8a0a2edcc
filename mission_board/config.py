import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ROBOTS = ("AMR-01", "AMR-02", "Fetcher-01", "MiR-100", "Locus-Bot")


@dataclass(frozen=True)
class Settings:
    data_dir: str = "mission_board_data"
    queue_delay_ms: int = 5000
    active_delay_ms: int = 10000
    robots: tuple[str, ...] = field(default=DEFAULT_ROBOTS)
    # Use the remote panel registry instead of panels.json when set
    panel_api_url: str = ""
    panel_api_token: str = ""

    @property
    def missions_path(self) -> Path:
        return Path(self.data_dir) / "missions.json"

    @property
    def panels_path(self) -> Path:
        return Path(self.data_dir) / "panels.json"

    @property
    def areas_path(self) -> Path:
        return Path(self.data_dir) / "areas.json"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number of milliseconds, got {raw!r}") from None


def load_settings() -> Settings:
    robots = tuple(
        r.strip() for r in os.getenv("MISSION_BOARD_ROBOTS", "").split(",") if r.strip()
    )
    return Settings(
        data_dir=os.getenv("MISSION_BOARD_DATA_DIR", "").strip() or "mission_board_data",
        queue_delay_ms=_int_env("MISSION_BOARD_QUEUE_DELAY_MS", 5000),
        active_delay_ms=_int_env("MISSION_BOARD_ACTIVE_DELAY_MS", 10000),
        robots=robots or DEFAULT_ROBOTS,
        panel_api_url=os.getenv("MISSION_BOARD_PANEL_API_URL", "").strip(),
        panel_api_token=os.getenv("MISSION_BOARD_PANEL_API_TOKEN", "").strip(),
    )
