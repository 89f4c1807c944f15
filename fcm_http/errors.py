# fcm_http/errors.py

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fcm_http.models import Response


class FCMError(Exception):
    """Bazowy błąd klienta FCM."""

    def __init__(self, message: str, response: Optional["Response"] = None):
        super().__init__(message)
        if response is None:
            # models importuje errors - import tutaj, żeby nie było cyklu
            from fcm_http.models import Response

            response = Response()
        # częściowo wypełniona odpowiedź (status_code == 0 gdy nie było odpowiedzi HTTP)
        self.response = response


class ConfigurationError(FCMError):
    """Brak klucza serwera lub innej wymaganej konfiguracji."""
    pass


class SerializationError(FCMError):
    """Wiadomości nie da się zakodować do JSON."""
    pass


class TransportError(FCMError):
    """Błąd sieci / DNS / TLS / timeout przy wysyłce."""
    pass


class DeserializationError(FCMError):
    """Status 200, ale treść odpowiedzi nie jest poprawnym JSON-em FCM."""

    def __init__(self, message: str, response: Optional["Response"] = None, body: Optional[str] = None):
        super().__init__(message, response=response)
        self.body = body
