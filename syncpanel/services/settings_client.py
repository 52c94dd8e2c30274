"""HTTP client for the admin settings API (the panel's settings store)."""
from typing import Any

import httpx

from syncpanel.config import settings
from syncpanel.logging_config import get_logger
from syncpanel.panel.errors import SettingsServerError, SettingsStoreError, SettingsValidationError

logger = get_logger("syncpanel.services.settings_client")


def _flatten(body: dict) -> dict[str, Any]:
    """{"settings": [{"key", "value"}, ...]} -> {key: value}"""
    return {item["key"]: item.get("value") for item in body.get("settings", [])}


def _error_from(resp: httpx.Response) -> SettingsStoreError:
    message = f"Request failed with status {resp.status_code}"
    try:
        errors = resp.json().get("errors") or []
        if errors and errors[0].get("message"):
            message = errors[0]["message"]
    except (ValueError, AttributeError):
        pass
    if resp.status_code == 422:
        return SettingsValidationError(message)
    return SettingsServerError(message)


class ApiSettingsStore:
    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
        headers: dict | None = None,
    ):
        self.base_url = (base_url or settings.settings_api_url).rstrip("/")
        self.transport = transport
        self.timeout = settings.settings_api_timeout if timeout is None else timeout
        self.headers = headers or {}

    async def _request(self, method: str, json: dict | None = None) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                resp = await client.request(
                    method,
                    f"{self.base_url}/settings",
                    json=json,
                    headers=self.headers,
                )
        except httpx.HTTPError as e:
            logger.warning("%s /settings failed: %s", method, e)
            raise SettingsServerError(f"Unable to reach the settings API: {e}") from e

        if resp.status_code >= 400:
            raise _error_from(resp)
        try:
            return _flatten(resp.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise SettingsServerError("Unreadable settings response") from e

    async def fetch(self) -> dict[str, Any]:
        return await self._request("GET")

    async def save(self, key: str, value: Any) -> dict[str, Any]:
        return await self._request("PUT", json={"settings": [{"key": key, "value": value}]})
