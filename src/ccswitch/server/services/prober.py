"""Reachability and authentication checks for providers and MCP servers."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from ccswitch.data.models.mcp_server import TransportType
from ccswitch.data.models.provider import ProviderType

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 10.0

MCP_INITIALIZE_REQUEST: dict[str, Any] = {
    "jsonrpc": "2.0",
    "method": "initialize",
    "id": 1,
    "params": {
        "protocolVersion": "2024-11-05",
        "capabilities": {},
        "clientInfo": {"name": "cc-switch-test", "version": "1.0"},
    },
}

SSE_HEADERS = {"Accept": "text/event-stream"}


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe."""

    success: bool
    message: str
    latency_ms: int | None = None


def candidate_urls(base_url: str) -> list[str]:
    """URLs tried for a provider, most specific first."""
    base = base_url.rstrip("/")
    return [f"{base}/v1/models", f"{base}/models", f"{base}/health", base_url]


class ConnectionProber:
    """
    Probes provider and MCP server endpoints over HTTP.

    Probes are sequential with one request in flight at a time, never
    retried, and never raise: every outcome is a ``ProbeResult``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = PROBE_TIMEOUT,
    ) -> None:
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def probe(self, kind: str, fields: dict[str, Any]) -> ProbeResult:
        """Dispatch on ``kind`` (``provider`` or ``mcp_server``)."""
        if kind == "provider":
            return await self.probe_provider(
                provider_type=fields.get("provider_type"),
                base_url=fields.get("base_url"),
                api_key=fields.get("api_key"),
            )
        if kind == "mcp_server":
            return await self.probe_mcp_server(
                transport_type=fields.get("transport_type"),
                command=fields.get("command"),
                url=fields.get("url"),
                args=fields.get("args"),
            )
        return ProbeResult(success=False, message=f"Unknown probe type: {kind}")

    async def probe_provider(
        self,
        provider_type: ProviderType | str | None,
        base_url: str | None,
        api_key: str | None = None,
    ) -> ProbeResult:
        """
        Check that a provider endpoint answers.

        Official providers are not probed. Otherwise the candidate URLs are
        tried in order; the first response below 500 decides the outcome.
        """
        if provider_type == ProviderType.OFFICIAL:
            return ProbeResult(
                success=True,
                message="Official login needs no connection test",
                latency_ms=0,
            )
        if not base_url:
            return ProbeResult(
                success=False, message="No base URL configured, cannot test connection"
            )

        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        start = time.monotonic()
        for url in candidate_urls(base_url):
            try:
                response = await self._client.get(url, headers=headers, timeout=self.timeout)
            except httpx.HTTPError as e:
                logger.warning(f"Probe of {url} failed: {e!s}")
                continue

            status = response.status_code
            if not 200 <= status < 500:
                logger.warning(f"Probe of {url} returned HTTP {status}")
                continue

            latency = _elapsed_ms(start)
            if status < 300:
                return ProbeResult(True, f"Connected ({url})", latency)
            if status in (401, 403):
                return ProbeResult(
                    False, f"Authentication failed ({status}), check the API key", latency
                )
            return ProbeResult(True, f"Service reachable (HTTP {status})", latency)

        return ProbeResult(
            success=False,
            message=f"Cannot connect to {base_url}, check the address",
            latency_ms=_elapsed_ms(start),
        )

    async def probe_mcp_server(
        self,
        transport_type: TransportType | str | None,
        command: str | None = None,
        url: str | None = None,
        args: list[str] | None = None,
    ) -> ProbeResult:
        """
        Check an MCP server descriptor.

        stdio servers run on the tool's host, so only the command is
        checked. http servers get a JSON-RPC ``initialize`` POST and sse
        servers a GET.
        """
        if transport_type == TransportType.STDIO:
            if not command:
                return ProbeResult(success=False, message="No command configured")
            command_line = " ".join([command, *(args or [])])
            return ProbeResult(
                success=True,
                message=(
                    f"Configuration valid (stdio: {command_line}). "
                    "stdio servers must be verified locally"
                ),
                latency_ms=0,
            )

        if not url:
            return ProbeResult(success=False, message="No URL configured")

        start = time.monotonic()
        try:
            if transport_type == TransportType.SSE:
                # the event stream stays open; only the status line is needed
                async with self._client.stream(
                    "GET", url, headers=SSE_HEADERS, timeout=self.timeout
                ) as response:
                    status = response.status_code
            else:
                response = await self._client.post(
                    url, json=MCP_INITIALIZE_REQUEST, timeout=self.timeout
                )
                status = response.status_code
        except httpx.TimeoutException:
            return ProbeResult(
                False, f"Connection timed out ({self.timeout:g}s)", _elapsed_ms(start)
            )
        except httpx.HTTPError as e:
            return ProbeResult(False, f"Connection failed: {e!s}", _elapsed_ms(start))

        latency = _elapsed_ms(start)
        if 200 <= status < 300:
            return ProbeResult(True, "MCP server connected", latency)
        if status in (401, 403):
            return ProbeResult(False, f"Authentication failed ({status})", latency)
        return ProbeResult(True, f"Service reachable (HTTP {status})", latency)

    async def close(self) -> None:
        """Close the HTTP client if this prober created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ConnectionProber:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
