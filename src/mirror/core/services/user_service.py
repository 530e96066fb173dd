"""User lifecycle operations: create, cascading delete, bulk delete."""

from typing import Any

from loguru import logger

from src.mirror.core.errors import NotFound
from src.mirror.core.services.store_gateway import StoreGateway
from src.mirror.entities import User


class UserService:
    def __init__(self, gateway: StoreGateway) -> None:
        self._gateway = gateway

    async def create_user(self, user: User) -> None:
        """Insert a single user.

        Raises:
            Conflict: If the domain id is already taken
        """
        await self._gateway.insert_user(user.to_document())
        logger.info("Created user {}", user.id)

    async def delete_user(self, user_id: Any) -> None:
        """Delete a user together with its posts and their comments.

        The steps run in a fixed order with no transaction around them. If one
        fails after the user is gone, its posts or comments stay orphaned.

        Raises:
            NotFound: If no user has this domain id; nothing is mutated
        """
        if await self._gateway.find_user(user_id) is None:
            raise NotFound("User not found")

        await self._gateway.delete_user(user_id)
        post_ids = [post["id"] for post in await self._gateway.find_posts_by_user(user_id)]
        await self._gateway.delete_posts_by_user(user_id)
        comments = 0
        if post_ids:
            comments = await self._gateway.delete_comments_by_posts(post_ids)

        logger.info(
            "Deleted user {} with {} posts and {} comments",
            user_id,
            len(post_ids),
            comments,
        )

    async def delete_all(self) -> None:
        await self._gateway.clear_all()
