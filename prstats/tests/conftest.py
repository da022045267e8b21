"""
Shared test fixtures for prstats tests.

The GraphQL API is faked with httpx.MockTransport; nothing here touches the
network.
"""
import json
from datetime import datetime, timezone, timedelta
from typing import Callable, List, Optional

import httpx
import pytest
from tenacity import wait_none

from prstats.providers.github.client import GitHubGraphQLClient


# Default base datetime for tests
DEFAULT_START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def make_node(
    number: int,
    login: Optional[str] = "alice",
    created_delta_hours: float = 0,
    open_hours: float = 1,
    base_time: Optional[datetime] = None,
    title: Optional[str] = None,
) -> dict:
    """Create a raw GraphQL pull request node, as returned by the API."""
    base_time = base_time or DEFAULT_START
    created_at = base_time + timedelta(hours=created_delta_hours)
    merged_at = created_at + timedelta(hours=open_hours)
    return {
        "number": number,
        "author": {"login": login} if login else None,
        "state": "MERGED",
        "mergedAt": iso(merged_at),
        "createdAt": iso(created_at),
        "title": title or f"PR {number}",
        "changedFiles": 1,
    }


def make_response(nodes: List[dict]) -> dict:
    return {"data": {"repository": {"pullRequests": {"nodes": nodes}}}}


@pytest.fixture
def three_pr_response():
    """
    Three merged PRs: #1 (10h open) and #2 (20h open) merged inside
    2026-01-01..2026-01-05, #3 merged on 2026-01-10.
    """
    return make_response([
        make_node(3, login="carol", created_delta_hours=24 * 8, open_hours=24),
        make_node(2, login="bob", created_delta_hours=30, open_hours=20),
        make_node(1, login="alice", created_delta_hours=2, open_hours=10),
    ])


@pytest.fixture
def make_client() -> Callable[..., GitHubGraphQLClient]:
    """
    Build a GitHubGraphQLClient backed by a handler.

    The handler receives the httpx.Request and returns an httpx.Response.
    Every request is also recorded on the returned client's `requests` list.
    """
    def factory(handler, **kwargs) -> GitHubGraphQLClient:
        seen = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        kwargs.setdefault("retry_wait", wait_none())
        client = GitHubGraphQLClient(transport=httpx.MockTransport(recording), **kwargs)
        client.requests = seen
        return client

    return factory


def json_handler(body: dict, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)
    return handler


def request_payload(request: httpx.Request) -> dict:
    return json.loads(request.content)
