"""Panel registry backed by the dashboard's ``/api/panels`` REST routes.

The adapter uses :mod:`httpx` and mirrors the server's JSON envelope
(``{"success": ..., "panel": ...}``).  The server addresses panels by an
opaque record id, so updates and deletes first look the record up by
``userId``.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..core.models import PanelConfig
from .base import PanelStore


class HttpPanelStore(PanelStore):
    """:class:`PanelStore` talking to a remote panel registry."""

    def __init__(
        self, base_url: str, token: str, client: httpx.Client | None = None
    ) -> None:
        """Store the API ``base_url``, bearer ``token`` and optional ``client``."""
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.client = client or httpx.Client()

    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.token}"}
        return self.client.request(
            method, f"{self.base_url}/api/panels{path}", headers=headers, **kwargs
        )

    def _record_by_user(self, user_id: str) -> dict[str, Any] | None:
        response = self._request("GET", f"/user/{user_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()["panel"]

    # ------------------------------------------------------------------
    def get_all(self) -> list[PanelConfig]:
        response = self._request("GET", "")
        response.raise_for_status()
        return [PanelConfig.model_validate(p) for p in response.json().get("panels", [])]

    def get_by_user_id(self, user_id: str) -> PanelConfig | None:
        record = self._record_by_user(user_id)
        return PanelConfig.model_validate(record) if record is not None else None

    def put(self, config: PanelConfig) -> None:
        record = self._record_by_user(config.user_id)
        if record is None:
            response = self._request("POST", "", json=config.to_wire())
        else:
            response = self._request("PUT", f"/{record['id']}", json=config.to_wire())
        response.raise_for_status()

    def delete(self, user_id: str) -> None:
        record = self._record_by_user(user_id)
        if record is None:
            return
        response = self._request("DELETE", f"/{record['id']}")
        if response.status_code != 404:
            response.raise_for_status()

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`."""
        self.client.close()
