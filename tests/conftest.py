from __future__ import annotations

import copy
import json
import os
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

os.environ["TRAVELTALK_LOG_MODE"] = "off"

import httpx
import pytest

from traveltalk.config import DEFAULT_CONFIG
from traveltalk.core import database as db
from traveltalk.core.schema import initialize_database
from traveltalk.translation.resolver import TranslationResolver

MYMEMORY_HOST = "api.mymemory.translated.net"
LIBRE_HOST = "libretranslate.com"
LIBRE_MIRROR_HOST = "libretranslate.de"

Handler = Callable[[httpx.Request], httpx.Response]


def mymemory_response(text: str = "", status: Any = 200, matches: Optional[list] = None) -> httpx.Response:
    payload: dict[str, Any] = {
        "responseStatus": status,
        "responseData": {"translatedText": text, "match": 1},
    }
    if matches is not None:
        payload["matches"] = matches
    return httpx.Response(200, json=payload)


def libre_response(text: str) -> httpx.Response:
    return httpx.Response(200, json={"translatedText": text})


def offline(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("network unreachable", request=request)


def echo_mymemory(request: httpx.Request) -> httpx.Response:
    return mymemory_response(request.url.params["q"])


@dataclass
class RecordedCall:
    host: str
    params: dict[str, str]
    body: Optional[dict[str, Any]]


@dataclass
class FakeProviders:
    """Routes requests by host to scripted handlers; every host is offline by default."""

    mymemory: Handler = offline
    libre: Handler = offline
    libre_mirror: Handler = offline
    calls: list[RecordedCall] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = None
        if request.method == "POST":
            body = json.loads(request.content.decode("utf-8"))
        self.calls.append(RecordedCall(request.url.host, dict(request.url.params), body))

        handler = {
            MYMEMORY_HOST: self.mymemory,
            LIBRE_HOST: self.libre,
            LIBRE_MIRROR_HOST: self.libre_mirror,
        }[request.url.host]
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def hosts(self) -> list[str]:
        return [call.host for call in self.calls]


@pytest.fixture(autouse=True)
def isolated_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    db_file = tmp_path / "traveltalk.db"
    monkeypatch.setattr(db, "DB_FILE", db_file)
    yield db_file


@pytest.fixture
def initialized_db(isolated_db: Path) -> Path:
    initialize_database()
    return isolated_db


@pytest.fixture
def fake() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def config() -> dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def make_resolver(
    fake: FakeProviders, sleeps: list[float], config: dict[str, Any]
) -> Callable[..., TranslationResolver]:
    def _factory(**kwargs: Any) -> TranslationResolver:
        kwargs.setdefault("config", config)
        return TranslationResolver(transport=fake.transport, sleep=sleeps.append, **kwargs)

    return _factory
