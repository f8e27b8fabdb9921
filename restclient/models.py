"""Data models for the REST client."""

from dataclasses import dataclass
from typing import Annotated, Generic, TypeVar
from urllib.parse import urljoin, urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from restclient.errors import EmptyResultError


T = TypeVar("T")
U = TypeVar("U")


class Endpoint(BaseModel):
    """Identity of a single upstream HTTP service.

    The name is used for logging, metrics and error context; every request
    path is resolved against the root URL.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1, description="Endpoint name")]
    root_url: Annotated[str, Field(min_length=1, description="Base URL")]

    @field_validator("root_url")
    @classmethod
    def validate_root_url(cls, v: str) -> str:
        """Ensure the root URL is an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            msg = f"Root URL must be an absolute http(s) URL: {v!r}"
            raise ValueError(msg)
        return v

    def resolve(self, path: str) -> str:
        """Resolve a request path against the root URL.

        Args:
            path: Relative or absolute path.

        Returns:
            Absolute request URL.
        """
        return urljoin(self.root_url, path)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a successful request: a decoded value, or no content.

    Use ``Result.present`` and ``Result.absent`` to construct.
    """

    _value: T | None = None
    _present: bool = False

    @classmethod
    def present(cls, value: T) -> "Result[T]":
        """Create a result holding a decoded value."""
        return cls(value, True)

    @classmethod
    def absent(cls) -> "Result[T]":
        """Create a result for a response without content."""
        return cls(None, False)

    @property
    def is_present(self) -> bool:
        """Whether the response carried a body."""
        return self._present

    def get(self) -> T:
        """Return the decoded value.

        Raises:
            EmptyResultError: If the response had no content.
        """
        if not self._present:
            msg = "No content"
            raise EmptyResultError(msg)
        return self._value  # type: ignore[return-value]

    def or_else(self, default: U) -> T | U:
        """Return the decoded value, or ``default`` when absent."""
        if self._present:
            return self._value  # type: ignore[return-value]
        return default

    def __bool__(self) -> bool:
        return self._present

    def __repr__(self) -> str:
        if self._present:
            return f"Result.present({self._value!r})"
        return "Result.absent()"
