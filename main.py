"""Entry point that checks the Dynatrace credentials of a OneAgent instance."""

import asyncio
import logging
import os

from dtcredentials.kube import KubernetesSecretStore, fetch_oneagent, load_kube_clients
from dtcredentials.resolver import build_client
from dtcredentials.settings import Settings


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


async def _check_connection(settings: Settings) -> None:
    logger = logging.getLogger("dtcredentials")
    core_v1, custom_api = load_kube_clients(settings)
    store = KubernetesSecretStore(core_v1, request_timeout=settings.api_timeout)
    instance = fetch_oneagent(custom_api, settings.oneagent_namespace, settings.oneagent_name)

    client = build_client(store, instance)
    logger.info("Dynatrace client ready for %s/%s at %s", instance.namespace, instance.name, client.url)
    try:
        hosts = await client.get_communication_hosts()
        for host in hosts:
            logger.info("Communication host %s://%s:%s", host.protocol, host.host, host.port)
        logger.info("Credentials verified, %d communication host(s) reachable.", len(hosts))
    finally:
        await client.aclose()


def main() -> None:
    """Resolve the client for the configured instance and make one API call."""
    _configure_logging()
    logger = logging.getLogger("dtcredentials")
    settings = Settings.load()

    try:
        asyncio.run(_check_connection(settings))
    except Exception:
        logger.exception("Credential check failed.")
        raise


if __name__ == "__main__":
    main()
