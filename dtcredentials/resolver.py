"""
Resolve Dynatrace credentials for a OneAgent instance and build a client.

The tokens live in a secret next to the OneAgent resource (named after the
instance unless ``spec.tokens`` points elsewhere). An optional proxy is read
either inline from ``spec.proxy.value`` or from the ``proxy`` key of the secret
named by ``spec.proxy.valueFrom``.
"""

import logging
from typing import Protocol

from dtcredentials import options as client_options
from dtcredentials.client import DynatraceClient, new_client
from dtcredentials.kube import SecretNotFoundError, SecretStore, SecretStoreError
from dtcredentials.models import OneAgent, Secret
from dtcredentials.options import Option

API_TOKEN_KEY = "apiToken"
PAAS_TOKEN_KEY = "paasToken"
PROXY_KEY = "proxy"


class CredentialResolutionError(RuntimeError):
    """Base class for failures while resolving client credentials."""


class MissingKeyError(CredentialResolutionError):
    """A required key is absent from a secret."""

    def __init__(self, key: str) -> None:
        super().__init__(f"missing token {key}")
        self.key = key


class UndecodableTokenError(CredentialResolutionError):
    """A secret value under a required key is not valid UTF-8."""

    def __init__(self, key: str) -> None:
        super().__init__(f"token {key} is not valid UTF-8")
        self.key = key


class InvalidSecretError(CredentialResolutionError):
    """The tokens secret lacks one of the required keys."""

    def __init__(self, secret_name: str, missing_key: str) -> None:
        super().__init__(f"invalid secret {secret_name}, missing token {missing_key}")
        self.secret_name = secret_name
        self.missing_key = missing_key


def get_tokens_name(instance: OneAgent) -> str:
    """Return the name of the secret holding the instance's tokens."""
    if instance.tokens is not None:
        return instance.tokens
    return instance.name


def extract_token(secret: Secret, key: str) -> str:
    """Return the whitespace-trimmed value stored under ``key``."""
    try:
        value = secret.data[key]
    except KeyError:
        raise MissingKeyError(key) from None
    try:
        return value.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise UndecodableTokenError(key) from None


def verify_secret(secret: Secret) -> None:
    """Raise ``InvalidSecretError`` unless both token keys are present."""
    for key in (API_TOKEN_KEY, PAAS_TOKEN_KEY):
        try:
            extract_token(secret, key)
        except MissingKeyError as exc:
            raise InvalidSecretError(secret.name, exc.key) from exc


class ClientResolver(Protocol):
    """Capability to produce a Dynatrace client for a OneAgent instance."""

    def resolve(self, store: SecretStore, instance: OneAgent) -> DynatraceClient:
        ...


class SecretClientResolver:
    """Builds clients from the tokens and proxy secrets referenced by the instance."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def resolve(self, store: SecretStore, instance: OneAgent) -> DynatraceClient:
        secret_name = get_tokens_name(instance)
        try:
            secret = store.get_secret(instance.namespace, secret_name)
        except SecretNotFoundError:
            secret = Secret(namespace=instance.namespace, name=secret_name)

        verify_secret(secret)

        opts: list[Option] = []
        if instance.skip_cert_check:
            opts.append(client_options.skip_certificate_validation(True))

        proxy_url = self.resolve_proxy(store, instance)
        # Proxy values that trim to empty add no option.
        if proxy_url:
            opts.append(client_options.proxy(proxy_url))

        # Independent of the validation pass above.
        api_token = extract_token(secret, API_TOKEN_KEY)
        paas_token = extract_token(secret, PAAS_TOKEN_KEY)

        return new_client(instance.api_url, api_token, paas_token, *opts)

    def resolve_proxy(self, store: SecretStore, instance: OneAgent) -> str | None:
        """Return the proxy URL configured for the instance, if any."""
        settings = instance.proxy
        if settings is None:
            return None

        if settings.value_from is not None:
            try:
                proxy_secret = store.get_secret(instance.namespace, settings.value_from)
            except SecretStoreError as exc:
                self._logger.info(
                    "Failed to get proxy secret %s/%s, continuing without proxy: %s",
                    instance.namespace,
                    settings.value_from,
                    exc,
                )
                return None
            return extract_token(proxy_secret, PROXY_KEY)

        return settings.value


class StaticClientResolver:
    """Resolver that ignores its inputs and always returns the same client."""

    def __init__(self, client: DynatraceClient) -> None:
        self._client = client

    def resolve(self, store: SecretStore, instance: OneAgent) -> DynatraceClient:
        return self._client


_default_resolver = SecretClientResolver()


def build_client(store: SecretStore, instance: OneAgent) -> DynatraceClient:
    """Create a Dynatrace client using the settings configured on the given instance."""
    return _default_resolver.resolve(store, instance)


def static_client(client: DynatraceClient) -> StaticClientResolver:
    """Return a resolver that always yields ``client``."""
    return StaticClientResolver(client)
