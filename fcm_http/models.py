# fcm_http/models.py

import json
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fcm_http.errors import SerializationError

# 4 tygodnie - maksymalny TTL akceptowany przez FCM
MAX_TIME_TO_LIVE = 2419200

PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"


def normalize_priority(priority: str) -> str:
    return PRIORITY_HIGH if priority == PRIORITY_HIGH else PRIORITY_NORMAL


def clamp_time_to_live(time_to_live: int) -> int:
    return min(time_to_live, MAX_TIME_TO_LIVE)


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""               # iOS, Android, Web
    body: str = ""                # iOS, Android, Web
    android_channel_id: str = ""  # Android O+
    icon: str = ""                # Android, Web
    sound: str = ""               # iOS, Android
    badge: str = ""               # iOS
    tag: str = ""                 # Android - zastępuje powiadomienie o tym samym tagu
    color: str = ""               # Android, #rrggbb
    click_action: str = ""
    subtitle: str = ""            # iOS
    body_loc_key: str = ""
    body_loc_args: str = ""
    title_loc_key: str = ""
    title_loc_args: str = ""

    def to_wire(self) -> Dict[str, str]:
        return {k: v for k, v in self.model_dump().items() if v}


class Message(BaseModel):
    """
    Wiadomość downstream dla legacy HTTP API FCM.

    Model jest niemutowalny - metody with_* zwracają nową kopię.
    Pola z wartością zerową ("", False, 0, [], None) nie trafiają do JSON-a.
    """

    model_config = ConfigDict(frozen=True)

    # adresaci - model nie pilnuje, żeby był ustawiony tylko jeden
    to: str = ""
    registration_ids: List[str] = Field(default_factory=list)
    condition: str = ""
    notification_key: str = ""  # deprecated, zamiast tego `to`

    collapse_key: str = ""
    priority: str = ""
    content_available: bool = False
    mutable_content: bool = False
    delay_while_idle: bool = False  # deprecated
    time_to_live: int = 0
    restricted_package_name: str = ""
    dry_run: bool = False

    data: Any = None
    notification: Notification = Field(default_factory=Notification)

    @field_validator("priority")
    @classmethod
    def _check_priority(cls, v: str) -> str:
        return normalize_priority(v) if v else v

    @field_validator("time_to_live")
    @classmethod
    def _check_time_to_live(cls, v: int) -> int:
        return clamp_time_to_live(v)

    # ====================================
    # SERIALIZACJA
    # ====================================

    def to_wire(self) -> Dict[str, Any]:
        payload = {
            k: v
            for k, v in self.model_dump(exclude={"data", "notification"}).items()
            if v
        }
        if self.data is not None:
            payload["data"] = self.data
        notification = self.notification.to_wire()
        if notification:
            payload["notification"] = notification
        return payload

    def encode(self) -> bytes:
        try:
            return json.dumps(self.to_wire(), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot encode FCM message: {e}") from e

    # ====================================
    # BUILDER
    # ====================================

    def _replace(self, **changes) -> "Message":
        # deep=True - kopia nie może dzielić listy registration_ids ani data z oryginałem
        return self.model_copy(update=changes, deep=True)

    def with_to(self, to: str) -> "Message":
        return self._replace(to=to)

    def with_registration_ids(self, registration_ids: List[str]) -> "Message":
        # dokleja do istniejącej listy, nie nadpisuje
        return self._replace(registration_ids=[*self.registration_ids, *registration_ids])

    def with_condition(self, condition: str) -> "Message":
        return self._replace(condition=condition)

    def with_notification_key(self, notification_key: str) -> "Message":
        return self._replace(notification_key=notification_key)

    def with_collapse_key(self, collapse_key: str) -> "Message":
        return self._replace(collapse_key=collapse_key)

    def with_priority(self, priority: str) -> "Message":
        return self._replace(priority=normalize_priority(priority))

    def with_content_available(self, content_available: bool) -> "Message":
        return self._replace(content_available=content_available)

    def with_mutable_content(self, mutable_content: bool) -> "Message":
        return self._replace(mutable_content=mutable_content)

    def with_delay_while_idle(self, delay_while_idle: bool) -> "Message":
        return self._replace(delay_while_idle=delay_while_idle)

    def with_time_to_live(self, time_to_live: int) -> "Message":
        return self._replace(time_to_live=clamp_time_to_live(time_to_live))

    def with_restricted_package_name(self, restricted_package_name: str) -> "Message":
        return self._replace(restricted_package_name=restricted_package_name)

    def with_dry_run(self, dry_run: bool) -> "Message":
        return self._replace(dry_run=dry_run)

    def with_data(self, data: Any) -> "Message":
        return self._replace(data=data)

    def with_notification(
        self,
        title: str = "",
        body: str = "",
        android_channel_id: str = "",
        icon: str = "",
        sound: str = "",
        badge: str = "",
        tag: str = "",
        color: str = "",
        click_action: str = "",
        subtitle: str = "",
        body_loc_key: str = "",
        body_loc_args: str = "",
        title_loc_key: str = "",
        title_loc_args: str = "",
    ) -> "Message":
        """Podmienia cały obiekt notification naraz."""
        notification = Notification(
            title=title,
            body=body,
            android_channel_id=android_channel_id,
            icon=icon,
            sound=sound,
            badge=badge,
            tag=tag,
            color=color,
            click_action=click_action,
            subtitle=subtitle,
            body_loc_key=body_loc_key,
            body_loc_args=body_loc_args,
            title_loc_key=title_loc_key,
            title_loc_args=title_loc_args,
        )
        return self._replace(notification=notification)


# liczby z odpowiedzi FCM mieszczą się w int64
Int64 = Annotated[int, Field(ge=-(2 ** 63), le=2 ** 63 - 1)]


class ResponseResult(BaseModel):
    # strict - "123" albo true w miejscu liczby to błędna odpowiedź, nie konwersja
    model_config = ConfigDict(strict=True)

    message_id: Int64 = 0
    registration_id: Int64 = 0
    error: Optional[str] = None


class Response(BaseModel):
    model_config = ConfigDict(strict=True)

    status_code: int = 0
    multicast_id: Int64 = 0
    success: Int64 = 0
    failure: Int64 = 0
    canonical_ids: Int64 = 0
    results: List[ResponseResult] = Field(default_factory=list)  # tylko multicast
    message_id: Int64 = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200 and not self.error
