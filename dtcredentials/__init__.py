"""
Credential resolution for Dynatrace API clients used by the OneAgent operator.

The resolver reads tokens (and optionally a proxy URL) from the secrets a
OneAgent resource references and hands back a configured client.
"""

from dtcredentials.client import DynatraceClient, DynatraceClientError, new_client
from dtcredentials.kube import KubernetesSecretStore, SecretNotFoundError, SecretStore, SecretStoreError
from dtcredentials.models import OneAgent, ProxySettings, Secret
from dtcredentials.resolver import (
    ClientResolver,
    CredentialResolutionError,
    InvalidSecretError,
    MissingKeyError,
    SecretClientResolver,
    StaticClientResolver,
    UndecodableTokenError,
    build_client,
    static_client,
)

__all__ = [
    "ClientResolver",
    "CredentialResolutionError",
    "DynatraceClient",
    "DynatraceClientError",
    "InvalidSecretError",
    "KubernetesSecretStore",
    "MissingKeyError",
    "OneAgent",
    "ProxySettings",
    "Secret",
    "SecretClientResolver",
    "SecretNotFoundError",
    "SecretStore",
    "SecretStoreError",
    "StaticClientResolver",
    "UndecodableTokenError",
    "build_client",
    "new_client",
    "static_client",
]
