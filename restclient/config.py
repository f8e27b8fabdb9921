"""Configuration model for a REST client instance."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from restclient.constants import DEFAULT_PAYLOAD_LOG_LENGTH
from restclient.models import Endpoint
from restclient.redact import is_sensitive_header


class RestClientConfig(BaseModel):
    """Configuration for one upstream endpoint.

    Credentials are set on the client at runtime (``set_basic_auth``), never
    stored in configuration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint_name: Annotated[str, Field(min_length=1, max_length=200)]
    root_url: Annotated[str, Field(min_length=1)]
    default_headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
    payload_log_length: Annotated[int, Field(ge=0, le=1_000_000)] = (
        DEFAULT_PAYLOAD_LOG_LENGTH
    )

    @field_validator("default_headers")
    @classmethod
    def validate_no_auth_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Ensure no credentials are stored in config."""
        for key in v:
            if is_sensitive_header(key):
                msg = (
                    f"Header '{key}' must not be stored in config; "
                    "use set_basic_auth or set_header at runtime"
                )
                raise ValueError(msg)
        return v

    @property
    def endpoint(self) -> Endpoint:
        """Endpoint identity described by this config."""
        return Endpoint(name=self.endpoint_name, root_url=self.root_url)
