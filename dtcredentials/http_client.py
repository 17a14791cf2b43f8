"""HTTP client factory for talking to the Dynatrace API."""

import httpx

from dtcredentials.options import ClientConfig


def create_dynatrace_http_client(base_url: str, config: ClientConfig) -> httpx.AsyncClient:
    """
    Build an AsyncClient configured for a Dynatrace environment.

    Authentication headers are attached per request since deployment and
    environment endpoints expect different tokens.
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=config.timeout,
        verify=not config.skip_cert_check,
        proxy=config.proxy_url,
    )
