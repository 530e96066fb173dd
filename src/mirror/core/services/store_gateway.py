"""Domain-id addressed access to the users, posts and comments collections."""

from collections.abc import Iterable, Sequence
from typing import Any

from loguru import logger

from src.mirror.core.errors import Conflict
from src.mirror.core.storage.document_store import Document, DocumentStore

# Reads come back ordered by domain id so aggregates are deterministic.
_BY_ID = [("id", 1)]


class StoreGateway:
    """Data-access layer for the three mirrored collections.

    None of these operations is transactional. A failure part way through a
    multi-step sequence leaves the store partially mutated.
    """

    def __init__(
        self,
        users: DocumentStore,
        posts: DocumentStore,
        comments: DocumentStore,
    ) -> None:
        self._users = users
        self._posts = posts
        self._comments = comments

    async def find_user(self, user_id: Any) -> Document | None:
        return await self._users.find_one({"id": user_id})

    async def find_posts_by_user(self, user_id: Any) -> list[Document]:
        return await self._posts.find({"userId": user_id}, sort=_BY_ID)

    async def find_comments_by_post(self, post_id: Any) -> list[Document]:
        return await self._comments.find({"postId": post_id}, sort=_BY_ID)

    async def insert_user(self, user: Document) -> None:
        """Store ``user`` verbatim.

        Raises:
            Conflict: If a user with the same domain id already exists
        """
        if await self._users.find_one({"id": user["id"]}) is not None:
            raise Conflict("User already exists")
        await self._users.insert_one(user)

    async def insert_post(self, post: Document) -> None:
        await self._posts.insert_one(post)

    async def insert_comments(self, comments: Sequence[Document]) -> None:
        if comments:
            await self._comments.insert_many(comments)

    async def delete_user(self, user_id: Any) -> int:
        return await self._users.delete_one({"id": user_id})

    async def delete_posts_by_user(self, user_id: Any) -> int:
        return await self._posts.delete_many({"userId": user_id})

    async def delete_comments_by_posts(self, post_ids: Iterable[Any]) -> int:
        post_ids = sorted(set(post_ids))
        if not post_ids:
            return 0
        return await self._comments.delete_many({"postId": {"$in": post_ids}})

    async def clear_all(self) -> None:
        users = await self._users.delete_many({})
        posts = await self._posts.delete_many({})
        comments = await self._comments.delete_many({})
        logger.info(
            "Cleared store: {} users, {} posts, {} comments", users, posts, comments
        )
