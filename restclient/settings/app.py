"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from restclient.constants import DEFAULT_PAYLOAD_LOG_LENGTH


class AppSettings(BaseSettings):
    """Environment configuration (``RESTCLIENT_*`` variables)."""

    model_config = SettingsConfigDict(
        env_prefix="RESTCLIENT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)
    payload_log_length: Annotated[int, Field(ge=0)] = DEFAULT_PAYLOAD_LOG_LENGTH
    username: str | None = Field(default=None)
    password: str | None = Field(default=None)

    @property
    def has_basic_auth(self) -> bool:
        """Whether both basic-auth credentials are set."""
        return self.username is not None and self.password is not None


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
