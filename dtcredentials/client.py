"""
Dynatrace API client wrapper.

Only the deployment calls needed to check a freshly resolved set of
credentials are implemented here; the rest of the API is not covered.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from dtcredentials.http_client import create_dynatrace_http_client
from dtcredentials.options import ClientConfig, Option

logger = logging.getLogger(__name__)


class DynatraceClientError(RuntimeError):
    """Represents failures building or using the Dynatrace client."""


@dataclass(frozen=True, slots=True)
class CommunicationHost:
    protocol: str
    host: str
    port: int


def _require_non_empty(value: str, field_name: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise DynatraceClientError(f"{field_name} must be a non-empty string.")
    return cleaned


@dataclass(slots=True)
class DynatraceClient:
    """Authenticated wrapper around a shared AsyncClient."""

    url: str
    api_token: str = field(repr=False)
    paas_token: str = field(repr=False)
    _client: httpx.AsyncClient
    options: tuple[Option, ...] = ()

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        await self._client.aclose()

    async def get_latest_agent_version(self, os: str, installer_type: str) -> str:
        """Return the newest OneAgent version available for an OS and installer type."""
        os_clean = _require_non_empty(os, "os")
        installer_type_clean = _require_non_empty(installer_type, "installer_type")
        data = await self._request(
            "GET",
            f"/v1/deployment/installer/agent/{os_clean}/{installer_type_clean}/latest/metainfo",
            token=self.paas_token,
        )
        version = data.get("latestAgentVersion", "")
        if not version:
            raise DynatraceClientError("Dynatrace API response did not include latestAgentVersion.")
        return version

    async def get_communication_hosts(self) -> list[CommunicationHost]:
        """Return the endpoints OneAgents use to reach the environment."""
        data = await self._request(
            "GET",
            "/v1/deployment/installer/agent/connectioninfo",
            token=self.paas_token,
        )
        hosts = []
        for endpoint in data.get("communicationEndpoints") or []:
            try:
                parsed = httpx.URL(endpoint)
            except httpx.InvalidURL:
                logger.warning("Ignoring malformed communication endpoint %r", endpoint)
                continue
            port = parsed.port or (443 if parsed.scheme == "https" else 80)
            hosts.append(CommunicationHost(protocol=parsed.scheme, host=parsed.host, port=port))
        return hosts

    async def _request(self, method: str, path: str, *, token: str, **kwargs: Any) -> dict[str, Any]:
        """Normalized request handler for all outgoing API calls."""
        headers = {"Authorization": f"Api-Token {token}"}
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("Dynatrace API request timed out", extra={"method": method, "path": path})
            raise DynatraceClientError(f"Dynatrace API request timed out ({method} {path}).") from exc
        except httpx.RequestError as exc:
            logger.error("Dynatrace API request failed", extra={"method": method, "path": path})
            raise DynatraceClientError(
                f"Dynatrace API request failed ({method} {path}): {exc!s}"
            ) from exc

        if response.is_error:
            snippet = response.text.strip()
            if len(snippet) > 512:
                snippet = f"{snippet[:512]}..."
            logger.warning(
                "Dynatrace API responded with error",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise DynatraceClientError(
                f"Dynatrace API error ({response.status_code}) during {method} {path}: {snippet or 'no body provided.'}"
            )

        try:
            data: dict[str, Any] = response.json()
        except json.JSONDecodeError as exc:
            raise DynatraceClientError(
                f"Dynatrace API returned invalid JSON during {method} {path}."
            ) from exc
        return data


def new_client(url: str, api_token: str, paas_token: str, *options: Option) -> DynatraceClient:
    """Create a client for the environment at ``url`` with the given tokens and options."""
    url_clean = _require_non_empty(url, "url").rstrip("/")
    api_token_clean = _require_non_empty(api_token, "api_token")
    paas_token_clean = _require_non_empty(paas_token, "paas_token")

    config = ClientConfig()
    for option in options:
        option.apply(config)

    return DynatraceClient(
        url=url_clean,
        api_token=api_token_clean,
        paas_token=paas_token_clean,
        _client=create_dynatrace_http_client(url_clean, config),
        options=tuple(options),
    )
