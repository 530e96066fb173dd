from __future__ import annotations

from typing import Any

import httpx
import pytest

from src.mirror.core.services import UpstreamClient
from src.mirror.runtime.config.config_data import UpstreamConfig

UPSTREAM_BASE_URL = "https://upstream.test"


def make_user(user_id: int, name: str) -> dict[str, Any]:
    return {
        "id": user_id,
        "name": name,
        "username": name.lower(),
        "email": f"{name.lower()}@example.test",
        "address": {
            "street": "Kulas Light",
            "suite": "Apt. 556",
            "city": "Gwenborough",
            "zipcode": "92998-3874",
            "geo": {"lat": "-37.3159", "lng": "81.1496"},
        },
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "company": {
            "name": "Romaguera-Crona",
            "catchPhrase": "Multi-layered client-server neural-net",
            "bs": "harness real-time e-markets",
        },
    }


def make_post(post_id: int, user_id: int) -> dict[str, Any]:
    return {
        "userId": user_id,
        "id": post_id,
        "title": f"post {post_id}",
        "body": f"body of post {post_id}",
    }


def make_comment(comment_id: int, post_id: int) -> dict[str, Any]:
    return {
        "postId": post_id,
        "id": comment_id,
        "name": f"comment {comment_id}",
        "email": f"c{comment_id}@example.test",
        "body": f"body of comment {comment_id}",
    }


@pytest.fixture
def upstream_data() -> dict[str, list[dict[str, Any]]]:
    """A small upstream data set.

    User 1 owns posts 1 and 2, user 2 owns post 3. Post 1 has two comments,
    post 2 none, post 3 one.
    """
    return {
        "users": [make_user(1, "Leanne"), make_user(2, "Ervin")],
        "posts": [make_post(1, 1), make_post(2, 1), make_post(3, 2)],
        "comments": [make_comment(1, 1), make_comment(2, 1), make_comment(3, 3)],
    }


@pytest.fixture
def upstream_calls() -> list[str]:
    """Records every upstream request as ``path?query`` in call order."""
    return []


@pytest.fixture
def upstream_transport(upstream_data, upstream_calls) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        params = request.url.params
        upstream_calls.append(
            f"{path}?{request.url.query.decode()}" if request.url.query else path
        )

        if path == "/users":
            return httpx.Response(200, json=upstream_data["users"])
        if path == "/posts":
            user_id = int(params["userId"])
            return httpx.Response(
                200, json=[p for p in upstream_data["posts"] if p["userId"] == user_id]
            )
        if path == "/comments":
            post_id = int(params["postId"])
            return httpx.Response(
                200,
                json=[c for c in upstream_data["comments"] if c["postId"] == post_id],
            )
        return httpx.Response(404, json={})

    return httpx.MockTransport(handler)


@pytest.fixture
def upstream_config() -> UpstreamConfig:
    return UpstreamConfig(base_url=UPSTREAM_BASE_URL, timeout_seconds=5)


@pytest.fixture
def upstream_client(upstream_config, upstream_transport) -> UpstreamClient:
    return UpstreamClient(upstream_config, transport=upstream_transport)
