"""Shared fixtures for the REST client tests."""

import socket
from collections.abc import Generator

import pytest
import structlog

from restclient.metrics import MetricRegistry
from tests.helpers.http_server import TestServer


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None, None, None]:
    """Reset the metrics singleton and structlog config around each test."""
    MetricRegistry.reset()
    structlog.reset_defaults()
    yield
    MetricRegistry.reset()
    structlog.reset_defaults()


@pytest.fixture
def metrics() -> MetricRegistry:
    """Fresh metric registry."""
    return MetricRegistry()


@pytest.fixture
def server() -> Generator[TestServer, None, None]:
    """Running HTTP server on an ephemeral port."""
    test_server = TestServer()
    test_server.start()
    yield test_server
    test_server.stop()


@pytest.fixture
def closed_port() -> int:
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])
