# fcm_http/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

FCM_ENDPOINT_URL = "https://fcm.googleapis.com/fcm/send"

# ====================================
# SETTINGS
# ====================================

class Settings(BaseSettings):
    # Wczytujemy zmienne środowiskowe (FCM_*) z pliku .env
    model_config = SettingsConfigDict(
        env_prefix="FCM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # klucz serwera z konsoli Firebase (Cloud Messaging -> Server key)
    SERVER_KEY: str = ""
    ENDPOINT_URL: str = FCM_ENDPOINT_URL
    TIMEOUT: float = 20.0


def get_settings() -> Settings:
    return Settings()
