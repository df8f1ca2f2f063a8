"""Supabase adapter – SupabaseRpcClient.

Calls PostgREST stored procedures over HTTP::

    POST {base_url}/rest/v1/rpc/{function}
    apikey: <key>
    Authorization: Bearer <key>
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx

from vegadmin.kernel.errors import ExternalServiceError, SerializationError, TimeoutError as AppTimeoutError
from vegadmin.observability.logging import get_logger

if TYPE_CHECKING:
    from vegadmin.config import AdminSettings

_log = get_logger(__name__)


class SupabaseRpcClient:
    """Thin async httpx wrapper for Supabase RPC with structured error mapping."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        schema: str | None = None,
        **kwargs: Any,
    ) -> None:
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if schema:
            headers["Content-Profile"] = schema
            headers["Accept-Profile"] = schema
        headers.update(kwargs.pop("headers", {}))
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            **kwargs,
        )

    @classmethod
    def from_settings(cls, settings: "AdminSettings", **kwargs: Any) -> "SupabaseRpcClient":
        return cls(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.rpc_timeout_seconds,
            **kwargs,
        )

    async def __aenter__(self) -> "SupabaseRpcClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke stored procedure *function* and return its decoded JSON result."""
        url = f"/rest/v1/rpc/{function}"
        try:
            response = await self._client.post(url, json=params or {})
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            _log.warning("rpc_call_timeout", function=function)
            raise AppTimeoutError(f"RPC timed out: {function}", cause=exc) from exc
        except httpx.HTTPStatusError as exc:
            message, backend_code = _error_details(exc.response)
            _log.warning(
                "rpc_call_failed",
                function=function,
                status_code=exc.response.status_code,
                backend_code=backend_code,
            )
            raise ExternalServiceError(
                service=function,
                message=message or f"HTTP {exc.response.status_code} from rpc {function}",
                status_code=exc.response.status_code,
                backend_code=backend_code,
            ) from exc
        except httpx.HTTPError as exc:
            _log.warning("rpc_call_failed", function=function, error=str(exc))
            raise ExternalServiceError(service=function, message=str(exc) or type(exc).__name__) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            raise SerializationError(
                f"RPC {function} returned a non-JSON body",
                payload_type=response.headers.get("content-type"),
            ) from exc


def _error_details(response: httpx.Response) -> tuple[str | None, str | None]:
    """Pull ``message``/``code`` out of a PostgREST error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    return body.get("message"), body.get("code")


__all__ = ["SupabaseRpcClient"]
