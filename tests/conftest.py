from dataclasses import dataclass, field

import pytest

from dtcredentials.kube import SecretNotFoundError
from dtcredentials.models import Secret


@dataclass
class FakeSecretStore:
    """In-memory ``SecretStore`` that records every lookup."""

    secrets: dict[tuple[str, str], dict[str, bytes]] = field(default_factory=dict)
    failures: dict[tuple[str, str], Exception] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def add(self, namespace: str, name: str, **data: str) -> None:
        self.secrets[(namespace, name)] = {key: value.encode() for key, value in data.items()}

    def get_secret(self, namespace: str, name: str) -> Secret:
        self.calls.append((namespace, name))
        if (namespace, name) in self.failures:
            raise self.failures[(namespace, name)]
        data = self.secrets.get((namespace, name))
        if data is None:
            raise SecretNotFoundError(namespace, name, f"secret {namespace}/{name} not found")
        return Secret(namespace=namespace, name=name, data=dict(data))


@pytest.fixture
def store() -> FakeSecretStore:
    return FakeSecretStore()
