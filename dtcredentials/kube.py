"""Kubernetes-backed access to secrets and OneAgent custom resources."""

import base64
import binascii
import logging
from typing import Any, Protocol

from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from dtcredentials.models import OneAgent, Secret
from dtcredentials.settings import Settings

logger = logging.getLogger(__name__)

ONEAGENT_GROUP = "dynatrace.com"
ONEAGENT_VERSION = "v1alpha1"
ONEAGENT_PLURAL = "oneagents"


class SecretStoreError(RuntimeError):
    """Reading a secret failed for a reason other than it not existing."""

    def __init__(self, namespace: str, name: str, message: str) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.name = name


class SecretNotFoundError(SecretStoreError):
    """The requested secret does not exist."""


class SecretStore(Protocol):
    """Read-only accessor for namespaced secrets."""

    def get_secret(self, namespace: str, name: str) -> Secret:
        ...


def _decode_secret_data(namespace: str, name: str, raw: dict[str, str] | None) -> dict[str, bytes]:
    decoded: dict[str, bytes] = {}
    for key, value in (raw or {}).items():
        try:
            decoded[key] = base64.b64decode(value or "", validate=True)
        except (binascii.Error, ValueError) as exc:
            raise SecretStoreError(
                namespace, name, f"secret {namespace}/{name} has undecodable value for {key}"
            ) from exc
    return decoded


class KubernetesSecretStore:
    """``SecretStore`` implementation on top of ``CoreV1Api``."""

    def __init__(self, core_v1: client.CoreV1Api, request_timeout: float | None = None) -> None:
        self._core_v1 = core_v1
        self._request_timeout = request_timeout

    def get_secret(self, namespace: str, name: str) -> Secret:
        kwargs: dict[str, Any] = {}
        if self._request_timeout is not None:
            kwargs["_request_timeout"] = self._request_timeout
        try:
            body = self._core_v1.read_namespaced_secret(name=name, namespace=namespace, **kwargs)
        except ApiException as exc:
            if exc.status == 404:
                raise SecretNotFoundError(
                    namespace, name, f"secret {namespace}/{name} not found"
                ) from exc
            logger.debug("Failed to read Kubernetes secret %s/%s", namespace, name, exc_info=True)
            raise SecretStoreError(
                namespace, name, f"failed to read secret {namespace}/{name}: {exc.reason}"
            ) from exc
        except (HTTPError, OSError) as exc:
            logger.debug("Failed to reach Kubernetes API for secret %s/%s", namespace, name, exc_info=True)
            raise SecretStoreError(
                namespace, name, f"failed to read secret {namespace}/{name}: {exc!s}"
            ) from exc

        data = _decode_secret_data(namespace, name, body.data)
        for key, value in (body.string_data or {}).items():
            data[key] = value.encode("utf-8")
        return Secret(namespace=namespace, name=name, data=data)


def load_kube_clients(settings: Settings) -> tuple[client.CoreV1Api, client.CustomObjectsApi]:
    """Load in-cluster configuration, falling back to a kubeconfig file."""
    try:
        config.load_incluster_config()
        logger.debug("Using in-cluster Kubernetes configuration")
    except ConfigException:
        config.load_kube_config(config_file=settings.kubeconfig)
        logger.debug("Using kubeconfig %s", settings.kubeconfig or "from default location")
    return client.CoreV1Api(), client.CustomObjectsApi()


def fetch_oneagent(custom_api: client.CustomObjectsApi, namespace: str, name: str) -> OneAgent:
    """Read a OneAgent custom resource and return its descriptor."""
    body = custom_api.get_namespaced_custom_object(
        group=ONEAGENT_GROUP,
        version=ONEAGENT_VERSION,
        namespace=namespace,
        plural=ONEAGENT_PLURAL,
        name=name,
    )
    return OneAgent.from_resource(body)
