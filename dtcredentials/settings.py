"""Environment-driven configuration for the OneAgent credential resolver."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    oneagent_name: str
    oneagent_namespace: str = "dynatrace"
    kubeconfig: str | None = None
    api_timeout: float = 30.0

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally.
        """
        load_dotenv()

        oneagent_name = os.getenv("ONEAGENT_NAME", "").strip()
        if not oneagent_name:
            raise ValueError("ONEAGENT_NAME is required but was not provided.")

        oneagent_namespace = os.getenv("ONEAGENT_NAMESPACE", "").strip() or "dynatrace"
        kubeconfig = os.getenv("KUBECONFIG", "").strip() or None

        api_timeout_raw = os.getenv("API_TIMEOUT", "").strip() or "30"
        try:
            api_timeout = float(api_timeout_raw)
        except ValueError as exc:
            raise ValueError("API_TIMEOUT must be a numeric value.") from exc
        if api_timeout <= 0:
            raise ValueError("API_TIMEOUT must be greater than zero.")

        return cls(
            oneagent_name=oneagent_name,
            oneagent_namespace=oneagent_namespace,
            kubeconfig=kubeconfig,
            api_timeout=api_timeout,
        )
