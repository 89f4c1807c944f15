# tests/conftest.py
"""
Wspólne fixtures: izolacja od zmiennych FCM_* / pliku .env
oraz fałszywy endpoint FCM oparty o httpx.MockTransport.
"""
import json

import httpx
import pytest

SERVER_KEY = "test-server-key"
ENDPOINT_URL = "https://fcm.test/fcm/send"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("FCM_SERVER_KEY", "FCM_ENDPOINT_URL", "FCM_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    # Settings czyta .env z katalogu roboczego
    monkeypatch.chdir(tmp_path)


class FakeFCM:
    """Nagrywa żądania i odpowiada zadanym statusem / treścią."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"multicast_id": 1, "success": 1, "failure": 0, "canonical_ids": 0, "message_id": 1}
        self.raw_body = None
        self.exc = None
        self.stream = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc("boom", request=request)
        if self.stream is not None:
            return httpx.Response(self.status_code, stream=self.stream)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_fcm():
    return FakeFCM()


@pytest.fixture
def http_client(fake_fcm):
    with httpx.Client(transport=httpx.MockTransport(fake_fcm)) as client:
        yield client


@pytest.fixture
def client(http_client):
    from fcm_http.client import FCMClient

    return FCMClient(server_key=SERVER_KEY, endpoint_url=ENDPOINT_URL, http_client=http_client)
