"""Shared fixtures: an in-process Spire server behind httpx.MockTransport."""

import json

import httpx
import pytest

from spire import Credentials, SpireClient

ROOT_URL = "https://spire.test:10880/api/v2/companies/acme"


class FakeSpire:
    """Serves a fixed record list with ``limit``/``start`` paging.

    Args:
        records: Records matching every query.
        count: Reported total; defaults to ``len(records)``.
        fail_at: Offset whose request answers 500.
    """

    def __init__(self, records=None, count=None, fail_at=None):
        self.records = records if records is not None else []
        self.count = len(self.records) if count is None else count
        self.fail_at = fail_at
        self.requests: list[httpx.Request] = []

    @property
    def offsets(self) -> list[int]:
        return [int(r.url.params.get("start", 0)) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        limit = int(request.url.params["limit"])
        start = int(request.url.params.get("start", 0))
        if start == self.fail_at:
            return httpx.Response(500, text="database unavailable")
        page = self.records[start : start + limit]
        return httpx.Response(200, json={"records": page, "count": self.count})


def make_records(n: int) -> list[dict]:
    return [{"id": i, "orderNo": f"{i:05d}"} for i in range(n)]


@pytest.fixture
def credentials():
    return Credentials("alice", "s3cret")


@pytest.fixture
def client_for():
    """Build a SpireClient wired to a request handler."""
    clients = []

    def factory(handler, **kwargs):
        client = SpireClient(ROOT_URL, transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


def json_body(request: httpx.Request):
    return json.loads(request.content) if request.content else None
