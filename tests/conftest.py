"""Pytest fixtures for gf-shopify tests."""

import os
import tempfile
from pathlib import Path
from typing import Callable, Union

import httpx
import pytest

from gf_shopify.models.config import RelayConfig
from gf_shopify.models.submission import FormSchema
from gf_shopify.store import ActivityLog

API = "/admin/api/2023-10"

Reply = Union[tuple[int, object], Callable[[httpx.Request], httpx.Response]]


class FakeShopify:
    """
    MockTransport handler keyed by (method, path).
    Each route holds a list of replies consumed in order; the last one repeats.
    A reply is (status, json_body) or a callable returning an httpx.Response.
    """

    def __init__(self, routes: dict[tuple[str, str], list[Reply]] | None = None):
        self.routes = {k: list(v) for k, v in (routes or {}).items()}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self.routes.get((request.method, request.url.path))
        if not replies:
            return httpx.Response(404, json={"errors": "Not Found"})
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if callable(reply):
            return reply(request)
        status, body = reply
        return httpx.Response(status, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(
            transport=httpx.MockTransport(self),
            follow_redirects=True,
            max_redirects=3,
        )

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GF_SHOPIFY_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("GF_SHOPIFY_"):
            monkeypatch.delenv(name)


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def config(temp_db: Path) -> RelayConfig:
    """Working marketing-variant config targeting form 7."""
    return RelayConfig(
        store_domain="shop.myshopify.com",
        api_token="shpat_test",
        target_form_id=7,
        tags="newsletter, subscriber",
        log_db=temp_db,
    )


@pytest.fixture
def activity_log(temp_db: Path) -> ActivityLog:
    """ActivityLog with temporary database."""
    return ActivityLog(temp_db)


@pytest.fixture
def form_payload() -> dict:
    """Form with a composite name field, a text field and an email field."""
    return {
        "id": 7,
        "title": "Newsletter",
        "fields": [
            {"id": 1, "type": "name"},
            {"id": 2, "type": "text"},
            {"id": 3, "type": "email"},
            {"id": 4, "type": "phone"},
        ],
    }


@pytest.fixture
def schema(form_payload: dict) -> FormSchema:
    return FormSchema.from_payload(form_payload)


@pytest.fixture
def entry() -> dict[str, str]:
    """Submission matching form_payload."""
    return {
        "id": "42",
        "1.3": "Ada",
        "1.6": "Lovelace",
        "2": "Countess",
        "3": "a@b.com",
        "4": "555-0100",
    }


@pytest.fixture
def make_shopify() -> Callable[..., FakeShopify]:
    """Factory for FakeShopify transports: make_shopify({("POST", path): [(201, {...})]})."""
    return FakeShopify
