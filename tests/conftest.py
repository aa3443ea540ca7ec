import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from rich_prompt.app.main import create_app
from rich_prompt.core.context import Context
from rich_prompt.services.client_pool import ClientPool

SYSTEM = "You are a helpful assistant."
STYLED = "Respond like a {style}."


def completion_body(*contents: Optional[str]) -> Dict[str, Any]:
    """Ответ chat.completions в формате OpenAI, по choice на каждый content."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": i,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
            for i, content in enumerate(contents)
        ],
    }


class FakeUpstream:
    """Подменяет апстрим на уровне httpx: пишет запросы, отдаёт заготовку."""

    def __init__(self):
        self.requests: List[Tuple[str, Dict[str, Any]]] = []
        self.body: Dict[str, Any] = completion_body("Hi there")
        self.status = 200
        self.fail: Optional[str] = None
        self.raw: Optional[str] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        key = request.headers["authorization"].removeprefix("Bearer ")
        self.requests.append((key, json.loads(request.content)))
        if self.fail is not None:
            raise httpx.ConnectError(self.fail, request=request)
        if self.raw is not None:
            return httpx.Response(self.status, text=self.raw)
        return httpx.Response(self.status, json=self.body)

    @property
    def last_payload(self) -> Dict[str, Any]:
        return self.requests[-1][1]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_pool(upstream):
    def _make(keys=("sk-test-a",), rng=None) -> ClientPool:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        return ClientPool.from_api_keys(list(keys), http_client=http_client, rng=rng)

    return _make


@pytest.fixture
def make_client(make_pool):
    """ASGI-клиент к приложению с заданными шаблонами."""

    def _make(system_template: str = SYSTEM, system_with_style_template: str = STYLED, keys=("sk-test-a",)):
        ctx = Context(
            pool=make_pool(keys),
            system_template=system_template,
            system_with_style_template=system_with_style_template,
        )
        app = create_app(ctx)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest.fixture
async def client(make_client):
    async with make_client() as ac:
        yield ac


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
