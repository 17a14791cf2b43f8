import pytest

from dtcredentials import settings as settings_module
from dtcredentials.settings import Settings


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: False)
    for name in ("ONEAGENT_NAME", "ONEAGENT_NAMESPACE", "KUBECONFIG", "API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_load_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ONEAGENT_NAME", "oneagent")

    settings = Settings.load()

    assert settings == Settings(oneagent_name="oneagent")


def test_load_requires_name() -> None:
    with pytest.raises(ValueError, match="ONEAGENT_NAME"):
        Settings.load()


@pytest.mark.parametrize("timeout", ["abc", "0", "-1"])
def test_load_rejects_bad_timeout(monkeypatch: pytest.MonkeyPatch, timeout: str) -> None:
    monkeypatch.setenv("ONEAGENT_NAME", "oneagent")
    monkeypatch.setenv("API_TIMEOUT", timeout)

    with pytest.raises(ValueError, match="API_TIMEOUT"):
        Settings.load()
