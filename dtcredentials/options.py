"""Construction-time options for the Dynatrace client."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class ClientConfig:
    """Mutable settings accumulated while a client is being constructed."""

    skip_cert_check: bool = False
    proxy_url: str | None = None
    timeout: float = 30.0


class Option(Protocol):
    def apply(self, config: ClientConfig) -> None:
        ...


@dataclass(frozen=True, slots=True)
class SkipCertificateValidation:
    skip: bool

    def apply(self, config: ClientConfig) -> None:
        config.skip_cert_check = self.skip


@dataclass(frozen=True, slots=True)
class Proxy:
    url: str

    def apply(self, config: ClientConfig) -> None:
        config.proxy_url = self.url


def skip_certificate_validation(skip: bool) -> SkipCertificateValidation:
    """Disable (or re-enable) TLS certificate verification."""
    return SkipCertificateValidation(skip)


def proxy(url: str) -> Proxy:
    """Route all API traffic through the given proxy URL."""
    return Proxy(url)
