"""Test configuration and fixtures for appcheck."""

import asyncio
import tempfile
from pathlib import Path
from typing import Callable

import httpx
import pytest

from appcheck.core.config import Settings
from appcheck.prober.scanner import ProberEngine

HTML_BODY = b"<!DOCTYPE html><html><head><title>Shop</title></head><body><h1>Open</h1></body></html>"

WELCOME_BODY = (
    b"<html><head><title>Heroku | Welcome to your new app!</title></head>"
    b"<body><h1>Welcome to your new app!</h1></body></html>"
)

APPLICATION_ERROR_BODY = (
    b'<!DOCTYPE html><html><head><meta charset="utf-8"><title>Application Error</title></head>'
    b'<body><iframe src="//www.herokucdn.com/error-pages/application-error.html"></iframe></body></html>'
)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it handled."""

    def __init__(self, handler: Callable):
        self.requests: list[httpx.Request] = []

        async def recording_handler(request: httpx.Request):
            self.requests.append(request)
            response = handler(request)
            if asyncio.iscoroutine(response):
                response = await response
            return response

        super().__init__(recording_handler)

    @property
    def hosts(self) -> list[str]:
        return [request.url.host for request in self.requests]


def app_name(request: httpx.Request) -> str:
    """Application name a request was sent for."""
    return request.url.host.split(".", 1)[0]


@pytest.fixture
def settings() -> Settings:
    """Default settings for testing."""
    return Settings()


@pytest.fixture
def temp_dir() -> Path:
    """Temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def make_engine(settings: Settings):
    """Build a ProberEngine whose requests go to a fake transport."""

    def factory(handler: Callable, engine_settings: Settings | None = None):
        transport = RecordingTransport(handler)
        engine = ProberEngine(engine_settings or settings, transport=transport)
        return engine, transport

    return factory


@pytest.fixture
def targets_file(temp_dir: Path) -> Path:
    """A target list with a blank line and a duplicate."""
    path = temp_dir / "apps.txt"
    path.write_text("shop\n\nwelcome\nshop\nbroken\n")
    return path
