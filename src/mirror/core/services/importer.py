"""Bulk import of the upstream data set into the document store."""

from dataclasses import asdict, dataclass

from loguru import logger
from pydantic import ValidationError

from src.mirror.core.errors import UpstreamFailure
from src.mirror.core.services.store_gateway import StoreGateway
from src.mirror.core.services.upstream_client import UpstreamClient
from src.mirror.entities import Comment, Post, User


@dataclass(frozen=True)
class ImportSummary:
    users: int = 0
    posts: int = 0
    comments: int = 0


class Importer:
    """Clear-and-reload pipeline from the upstream API into the store.

    Every call is issued sequentially: users, then each user's posts, then each
    post's comments. The first failure aborts the run; the store keeps
    whatever was written up to that point. Re-running starts from scratch.
    """

    def __init__(self, gateway: StoreGateway, upstream: UpstreamClient) -> None:
        self._gateway = gateway
        self._upstream = upstream

    async def load_all(self) -> ImportSummary:
        await self._gateway.clear_all()

        users = _validated(User, await self._upstream.fetch_users())
        post_count = 0
        comment_count = 0

        for user in users:
            await self._gateway.insert_user(user.to_document())

            posts = _validated(Post, await self._upstream.fetch_posts(user.id))
            for post in posts:
                await self._gateway.insert_post(post.to_document())

                comments = _validated(
                    Comment, await self._upstream.fetch_comments(post.id)
                )
                if comments:
                    await self._gateway.insert_comments(
                        [comment.to_document() for comment in comments]
                    )
                comment_count += len(comments)

            post_count += len(posts)
            logger.info("Imported user {} with {} posts", user.id, len(posts))

        summary = ImportSummary(
            users=len(users), posts=post_count, comments=comment_count
        )
        logger.bind(**asdict(summary)).info("import.complete")
        return summary


def _validated(model, records):
    try:
        return [model.model_validate(record) for record in records]
    except ValidationError as exc:
        raise UpstreamFailure(
            f"Upstream returned malformed {model.__name__} records"
        ) from exc
