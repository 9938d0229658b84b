"""
epdqplus.config
~~~~~~~~~~~~~~~
Settings for applications and the CLI.

The adapter itself takes everything as arguments; these settings only
supply defaults read from the environment or a ``.env`` file.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Identity
    SERVICE_NAME: str = "epdqplus"

    # Observability
    LOG_LEVEL: str = "INFO"

    # HTTP client timeout (seconds)
    HTTP_TIMEOUT: float = 30.0

    # Gateway
    EPDQ_TEST_MODE: bool = False

    # Back-office credentials
    EPDQ_PSPID: str = ""
    EPDQ_LOGIN: str = ""
    EPDQ_PASSWORD: str = ""
    EPDQ_SHASIGN: str = ""  # SHA-IN pass phrase; leave empty to send unsigned

    def credentials(self) -> dict[str, str]:
        """Return the configured credentials as generic content fields."""
        fields = {
            "pspid": self.EPDQ_PSPID,
            "login": self.EPDQ_LOGIN,
            "password": self.EPDQ_PASSWORD,
            "shasign": self.EPDQ_SHASIGN,
        }
        return {name: value for name, value in fields.items() if value}


settings = Settings()
