"""Read-only client for the JSONPlaceholder-style upstream API."""

from typing import Any

import httpx
from loguru import logger

from src.mirror.core.errors import UpstreamFailure
from src.mirror.runtime.config.config_data import UpstreamConfig
from src.mirror.runtime.context import get_config


class UpstreamClient:
    """Fetches users, posts and comments collections keyed by parent id."""

    def __init__(
        self,
        config: UpstreamConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        config = config or get_config().upstream
        self._base_url = config.base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=config.timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def fetch_users(self) -> list[dict[str, Any]]:
        return await self._get_collection("/users")

    async def fetch_posts(self, user_id: Any) -> list[dict[str, Any]]:
        return await self._get_collection("/posts", params={"userId": user_id})

    async def fetch_comments(self, post_id: Any) -> list[dict[str, Any]]:
        return await self._get_collection("/comments", params={"postId": post_id})

    async def _get_collection(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """GET ``path`` and return its JSON array body.

        Raises:
            UpstreamFailure: On transport errors, non-2xx status or a body
                that is not a JSON array of objects
        """
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as exc:
            logger.bind(path=path, params=params).error("upstream.error: {}", exc)
            raise UpstreamFailure(f"Failed to fetch {path}: {exc}") from exc
        except ValueError as exc:
            raise UpstreamFailure(f"Upstream returned invalid JSON for {path}") from exc

        if not isinstance(payload, list) or not all(
            isinstance(item, dict) for item in payload
        ):
            raise UpstreamFailure(f"Upstream returned a non-array payload for {path}")

        logger.debug("Fetched {} records from {} {}", len(payload), path, params or "")
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()
