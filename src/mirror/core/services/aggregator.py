"""Read-time assembly of a user with its posts and their comments."""

from typing import Any

from src.mirror.core.services.store_gateway import StoreGateway
from src.mirror.entities import PostWithComments, UserWithPosts


class Aggregator:
    def __init__(self, gateway: StoreGateway) -> None:
        self._gateway = gateway

    async def get_user_data(self, user_id: Any) -> UserWithPosts | None:
        """Build the nested ``UserWithPosts`` view for ``user_id``.

        Issues one user read, one posts read and one comments read per post,
        in sequence. Posts and comments are ordered by their domain id.

        Returns:
            The aggregate, or None if no user has this domain id
        """
        user = await self._gateway.find_user(user_id)
        if user is None:
            return None

        posts = []
        for post in await self._gateway.find_posts_by_user(user_id):
            comments = await self._gateway.find_comments_by_post(post["id"])
            posts.append(PostWithComments.model_validate({**post, "comments": comments}))

        return UserWithPosts.model_validate({**user, "posts": posts})
