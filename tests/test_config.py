import pytest
from pydantic import ValidationError

from fcm_http.client import FCMClient
from fcm_http.config import FCM_ENDPOINT_URL, get_settings


def test_defaults():
    settings = get_settings()

    assert settings.SERVER_KEY == ""
    assert settings.ENDPOINT_URL == "https://fcm.googleapis.com/fcm/send"
    assert settings.TIMEOUT == 20.0


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("FCM_SERVER_KEY", "env-key")
    monkeypatch.setenv("FCM_ENDPOINT_URL", "http://localhost:8080/fcm/send")
    monkeypatch.setenv("FCM_TIMEOUT", "2.5")

    settings = get_settings()

    assert settings.SERVER_KEY == "env-key"
    assert settings.ENDPOINT_URL == "http://localhost:8080/fcm/send"
    assert settings.TIMEOUT == 2.5


def test_reads_dotenv_file(tmp_path):
    # conftest przenosi katalog roboczy do tmp_path
    (tmp_path / ".env").write_text("FCM_SERVER_KEY=file-key\nOTHER_VAR=x\n", encoding="utf-8")

    assert get_settings().SERVER_KEY == "file-key"


def test_client_falls_back_to_settings(monkeypatch):
    monkeypatch.setenv("FCM_SERVER_KEY", "env-key")
    monkeypatch.setenv("FCM_TIMEOUT", "7")

    client = FCMClient()

    assert client.server_key == "env-key"
    assert client.endpoint_url == FCM_ENDPOINT_URL
    assert client.timeout == 7.0


def test_explicit_arguments_override_settings(monkeypatch):
    monkeypatch.setenv("FCM_SERVER_KEY", "env-key")

    client = FCMClient(server_key="arg-key", endpoint_url="http://mock/send", timeout=1.0)

    assert client.server_key == "arg-key"
    assert client.endpoint_url == "http://mock/send"
    assert client.timeout == 1.0


def test_full_arguments_skip_settings(monkeypatch):
    monkeypatch.setenv("FCM_TIMEOUT", "not-a-number")

    client = FCMClient(server_key="k", endpoint_url="http://mock/send", timeout=1.0)

    assert client.timeout == 1.0


def test_malformed_settings_fail_when_needed(monkeypatch):
    monkeypatch.setenv("FCM_TIMEOUT", "not-a-number")

    with pytest.raises(ValidationError):
        FCMClient(server_key="k")
