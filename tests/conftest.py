from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app import singletons
from app.main import create_app


def es_response(sources: list[dict[str, Any]], total: int | None = None, aggs: dict | None = None) -> dict:
    """Shape of an Elasticsearch search response body."""
    body: dict[str, Any] = {
        "took": 1,
        "timed_out": False,
        "hits": {
            "total": {"value": len(sources) if total is None else total, "relation": "eq"},
            "hits": [{"_index": "x", "_id": str(i), "_source": s} for i, s in enumerate(sources)],
        },
    }
    if aggs is not None:
        body["aggregations"] = aggs
    return body


class FakeEs:
    """Records search kwargs; replies per index from queued responses."""
    def __init__(self, responses: dict[str, list[dict]] | None = None, error: Exception | None = None):
        self.responses = {k: list(v) for k, v in (responses or {}).items()}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def search(self, index: str, **kwargs):
        self.calls.append({"index": index, **kwargs})
        if self.error is not None:
            raise self.error
        queue = self.responses.get(index) or []
        if queue:
            return queue.pop(0) if len(queue) > 1 else queue[0]
        return es_response([])


@pytest.fixture
def fake_es():
    return FakeEs


@pytest.fixture
def make_client():
    """Wire fakes into the singletons and build a TestClient around them."""
    def _make(es: FakeEs, wm_handler=None) -> TestClient:
        handler = wm_handler or (lambda request: httpx.Response(404, text="no such run"))
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://wm")
        singletons.wire(es, http)
        return TestClient(create_app())

    yield _make
    singletons.wire(singletons.make_es_client(), singletons.make_wm_http())


@pytest.fixture
def es_resp():
    return es_response
