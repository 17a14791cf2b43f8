"""Typed views over the OneAgent custom resource and the secrets it references."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ProxySettings(BaseModel):
    """Proxy configuration: either an inline URL or the name of a secret holding one."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str | None = None
    value_from: str | None = Field(default=None, alias="valueFrom")

    @field_validator("value", "value_from", mode="before")
    @classmethod
    def normalize_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)


class OneAgent(BaseModel):
    """Read-only descriptor of a OneAgent instance and its connection parameters."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    namespace: str
    api_url: str = Field(alias="apiUrl")
    skip_cert_check: bool = Field(default=False, alias="skipCertCheck")
    tokens: str | None = None
    proxy: ProxySettings | None = None

    @field_validator("tokens", mode="before")
    @classmethod
    def normalize_tokens(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @classmethod
    def from_resource(cls, body: Mapping[str, Any]) -> "OneAgent":
        """Build the descriptor from a custom-object payload as returned by the API server."""
        metadata = body.get("metadata") or {}
        spec = body.get("spec") or {}
        return cls.model_validate(
            {
                **spec,
                "name": metadata.get("name", ""),
                "namespace": metadata.get("namespace", ""),
            }
        )


@dataclass(frozen=True, slots=True)
class Secret:
    """Namespace-scoped mapping of keys to raw byte values."""

    namespace: str
    name: str
    data: Mapping[str, bytes] = field(default_factory=dict)
