# fcm_http/client.py

import logging
from typing import Any, Dict, List, Optional

import httpx

from fcm_http.config import get_settings
from fcm_http.errors import (
    ConfigurationError,
    DeserializationError,
    TransportError,
)
from fcm_http.models import Message, Response

logger = logging.getLogger(__name__)


class FCMClientCommon:
    """
    Wspólna część klientów: klucz serwera, endpoint, bieżąca wiadomość i settery.

    Settery nie robią I/O - podmieniają `self.message` na nową kopię.
    Klient nie jest thread-safe.
    """

    def __init__(
        self,
        server_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        message: Optional[Message] = None,
    ):
        # ustawienia czytamy tylko gdy czegoś brakuje w argumentach
        if server_key is None or not endpoint_url or timeout is None:
            settings = get_settings()
            server_key = server_key if server_key is not None else settings.SERVER_KEY
            endpoint_url = endpoint_url or settings.ENDPOINT_URL
            timeout = timeout if timeout is not None else settings.TIMEOUT
        self.server_key = server_key
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.message = message if message is not None else Message()

    # ====================================
    # SETTERY
    # ====================================

    def set_server_key(self, server_key: str) -> None:
        self.server_key = server_key

    def set_to(self, to: str) -> None:
        self.message = self.message.with_to(to)

    def set_registration_ids(self, registration_ids: List[str]) -> None:
        self.message = self.message.with_registration_ids(registration_ids)

    def set_condition(self, condition: str) -> None:
        self.message = self.message.with_condition(condition)

    def set_notification_key(self, notification_key: str) -> None:
        self.message = self.message.with_notification_key(notification_key)

    def set_collapse_key(self, collapse_key: str) -> None:
        self.message = self.message.with_collapse_key(collapse_key)

    def set_priority(self, priority: str) -> None:
        self.message = self.message.with_priority(priority)

    def set_content_available(self, content_available: bool) -> None:
        self.message = self.message.with_content_available(content_available)

    def set_mutable_content(self, mutable_content: bool) -> None:
        self.message = self.message.with_mutable_content(mutable_content)

    def set_delay_while_idle(self, delay_while_idle: bool) -> None:
        self.message = self.message.with_delay_while_idle(delay_while_idle)

    def set_time_to_live(self, time_to_live: int) -> None:
        self.message = self.message.with_time_to_live(time_to_live)

    def set_restricted_package_name(self, restricted_package_name: str) -> None:
        self.message = self.message.with_restricted_package_name(restricted_package_name)

    def set_dry_run(self, dry_run: bool) -> None:
        self.message = self.message.with_dry_run(dry_run)

    def set_data(self, data: Any) -> None:
        self.message = self.message.with_data(data)

    def set_notification(
        self,
        title: str,
        body: str,
        android_channel_id: str,
        icon: str,
        sound: str,
        badge: str,
        tag: str,
        color: str,
        click_action: str,
        subtitle: str,
        body_loc_key: str,
        body_loc_args: str,
        title_loc_key: str,
        title_loc_args: str,
    ) -> None:
        self.message = self.message.with_notification(
            title,
            body,
            android_channel_id,
            icon,
            sound,
            badge,
            tag,
            color,
            click_action,
            subtitle,
            body_loc_key,
            body_loc_args,
            title_loc_key,
            title_loc_args,
        )

    def reset_message(self) -> None:
        self.message = Message()

    # ====================================
    # REQUEST / RESPONSE
    # ====================================

    def _prepare(self, message: Optional[Message]) -> bytes:
        if not self.server_key:
            raise ConfigurationError("Missing FCM server key (FCM_SERVER_KEY)", response=Response())
        message = message if message is not None else self.message
        return message.encode()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"key={self.server_key}",
            "Content-Type": "application/json",
        }

    def _parse_response(self, resp: httpx.Response) -> Response:
        logger.debug("FCM %s -> %s", self.endpoint_url, resp.status_code)

        # status != 200 to nie wyjątek - wołający sprawdza status_code
        if resp.status_code != 200:
            return Response(status_code=resp.status_code)

        try:
            parsed = Response.model_validate_json(resp.content)
        except ValueError as e:
            # pydantic.ValidationError (też dla niepoprawnego JSON-a) to ValueError
            raise DeserializationError(
                f"Invalid FCM response body: {e}",
                response=Response(status_code=resp.status_code),
                body=resp.text[:400],
            ) from e

        return parsed.model_copy(update={"status_code": resp.status_code})


class FCMClient(FCMClientCommon):
    """Synchroniczny klient - jedno blokujące żądanie na wysyłkę."""

    def __init__(
        self,
        server_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        message: Optional[Message] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__(
            server_key=server_key,
            endpoint_url=endpoint_url,
            timeout=timeout,
            message=message,
        )
        self.http_client = http_client

    def send_message(self, message: Optional[Message] = None) -> Response:
        body = self._prepare(message)
        if self.http_client is not None:
            return self._post(self.http_client, body)
        with httpx.Client(timeout=self.timeout) as client:
            return self._post(client, body)

    def _post(self, client: httpx.Client, body: bytes) -> Response:
        request = client.build_request("POST", self.endpoint_url, content=body, headers=self._headers())
        try:
            resp = client.send(request, stream=True)
        except httpx.HTTPError as e:
            # brak obiektu odpowiedzi - nie ma skąd wziąć status_code
            raise TransportError(f"FCM request failed: {e}", response=Response()) from e

        try:
            resp.read()
        except httpx.HTTPError as e:
            # status już przyszedł, urwało się na treści
            raise TransportError(
                f"FCM response body read failed: {e}",
                response=Response(status_code=resp.status_code),
            ) from e
        finally:
            resp.close()
        return self._parse_response(resp)


class AsyncFCMClient(FCMClientCommon):
    """Wersja asyncio, ten sam kontrakt co FCMClient.send_message."""

    def __init__(
        self,
        server_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        message: Optional[Message] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            server_key=server_key,
            endpoint_url=endpoint_url,
            timeout=timeout,
            message=message,
        )
        self.http_client = http_client

    async def send_message(self, message: Optional[Message] = None) -> Response:
        body = self._prepare(message)
        if self.http_client is not None:
            return await self._post(self.http_client, body)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._post(client, body)

    async def _post(self, client: httpx.AsyncClient, body: bytes) -> Response:
        request = client.build_request("POST", self.endpoint_url, content=body, headers=self._headers())
        try:
            resp = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise TransportError(f"FCM request failed: {e}", response=Response()) from e

        try:
            await resp.aread()
        except httpx.HTTPError as e:
            raise TransportError(
                f"FCM response body read failed: {e}",
                response=Response(status_code=resp.status_code),
            ) from e
        finally:
            await resp.aclose()
        return self._parse_response(resp)
