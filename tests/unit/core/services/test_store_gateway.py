"""Unit tests for StoreGateway."""

import pytest

from src.mirror.core.errors import Conflict


class TestStoreGateway:
    @pytest.mark.asyncio
    async def test_insert_user_rejects_duplicate_domain_id(self, gateway):
        await gateway.insert_user({"id": 1, "name": "first"})

        with pytest.raises(Conflict):
            await gateway.insert_user({"id": 1, "name": "second"})

        assert (await gateway.find_user(1))["name"] == "first"

    @pytest.mark.asyncio
    async def test_posts_and_comments_unconditional_inserts(self, gateway):
        post = {"id": 1, "userId": 1, "title": "t", "body": "b"}
        await gateway.insert_post(post)
        await gateway.insert_post(post)

        assert len(await gateway.find_posts_by_user(1)) == 2

    @pytest.mark.asyncio
    async def test_reads_are_ordered_by_domain_id(self, gateway):
        for post_id in (5, 2, 9):
            await gateway.insert_post({"id": post_id, "userId": 1})
        await gateway.insert_comments(
            [{"id": 30, "postId": 2}, {"id": 10, "postId": 2}, {"id": 20, "postId": 2}]
        )

        posts = await gateway.find_posts_by_user(1)
        comments = await gateway.find_comments_by_post(2)

        assert [p["id"] for p in posts] == [2, 5, 9]
        assert [c["id"] for c in comments] == [10, 20, 30]

    @pytest.mark.asyncio
    async def test_empty_comment_batch_is_noop(self, gateway, store_service):
        await gateway.insert_comments([])

        assert len(store_service.comments) == 0

    @pytest.mark.asyncio
    async def test_delete_comments_by_posts(self, gateway, seed_user):
        await seed_user(gateway, 1, [1, 2])
        await seed_user(gateway, 2, [3])

        assert await gateway.delete_comments_by_posts(set()) == 0
        assert await gateway.delete_comments_by_posts({1, 2}) == 4
        assert await gateway.find_comments_by_post(1) == []
        assert len(await gateway.find_comments_by_post(3)) == 2

    @pytest.mark.asyncio
    async def test_deleting_nothing_is_not_an_error(self, gateway):
        assert await gateway.delete_user(404) == 0
        assert await gateway.delete_posts_by_user(404) == 0

    @pytest.mark.asyncio
    async def test_clear_all(self, gateway, seed_user, store_service):
        await seed_user(gateway, 1, [1, 2])

        await gateway.clear_all()

        assert len(store_service.users) == 0
        assert len(store_service.posts) == 0
        assert len(store_service.comments) == 0
