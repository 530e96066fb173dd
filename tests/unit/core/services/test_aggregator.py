"""Unit tests for the Aggregator."""

import pytest

from src.mirror.entities import UserWithPosts


class TestAggregator:
    @pytest.mark.asyncio
    async def test_absent_user_is_none(self, aggregator):
        assert await aggregator.get_user_data(1) is None

    @pytest.mark.asyncio
    async def test_user_without_posts(self, aggregator, gateway):
        await gateway.insert_user({"id": 101, "name": "Ann", "username": "ann1"})

        result = await aggregator.get_user_data(101)

        assert isinstance(result, UserWithPosts)
        assert result.to_document() == {
            "id": 101,
            "name": "Ann",
            "username": "ann1",
            "posts": [],
        }

    @pytest.mark.asyncio
    async def test_nested_posts_and_comments(self, aggregator, gateway, seed_user):
        await seed_user(gateway, 1, [2, 1])
        await seed_user(gateway, 2, [3])

        document = (await aggregator.get_user_data(1)).to_document()

        assert [post["id"] for post in document["posts"]] == [1, 2]
        assert [c["id"] for c in document["posts"][0]["comments"]] == [101, 102]
        assert [c["id"] for c in document["posts"][1]["comments"]] == [201, 202]
        assert all(
            comment["postId"] == post["id"]
            for post in document["posts"]
            for comment in post["comments"]
        )

    @pytest.mark.asyncio
    async def test_unknown_fields_are_kept(self, aggregator, gateway):
        await gateway.insert_user({"id": 7, "nickname": "seven"})

        document = (await aggregator.get_user_data(7)).to_document()

        assert document["nickname"] == "seven"
