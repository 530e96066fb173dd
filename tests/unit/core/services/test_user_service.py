"""Unit tests for UserService."""

import pytest

from src.mirror.core.errors import Conflict, NotFound
from src.mirror.entities import User


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_then_duplicate(self, user_service, gateway):
        user = User.model_validate({"id": 101, "name": "Ann"})

        await user_service.create_user(user)
        with pytest.raises(Conflict):
            await user_service.create_user(user)

        assert await gateway.find_user(101) == {"id": 101, "name": "Ann"}


class TestCascadingDelete:
    @pytest.mark.asyncio
    async def test_missing_user_is_not_found_without_mutation(
        self, user_service, gateway, seed_user, store_service
    ):
        await seed_user(gateway, 1, [1])
        # Orphan posts for a user that does not exist must survive
        await gateway.insert_post({"id": 50, "userId": 404})

        with pytest.raises(NotFound):
            await user_service.delete_user(404)

        assert len(store_service.posts) == 2
        assert len(store_service.comments) == 2

    @pytest.mark.asyncio
    async def test_removes_user_posts_and_their_comments(
        self, user_service, gateway, seed_user
    ):
        await seed_user(gateway, 1, [1, 2])
        await seed_user(gateway, 2, [3])

        await user_service.delete_user(1)

        assert await gateway.find_user(1) is None
        assert await gateway.find_posts_by_user(1) == []
        assert await gateway.find_comments_by_post(1) == []
        assert await gateway.find_comments_by_post(2) == []
        # Other users are untouched
        assert await gateway.find_user(2) is not None
        assert len(await gateway.find_comments_by_post(3)) == 2

    @pytest.mark.asyncio
    async def test_user_without_posts(self, user_service, gateway):
        await gateway.insert_user({"id": 5})

        await user_service.delete_user(5)

        assert await gateway.find_user(5) is None

    @pytest.mark.asyncio
    async def test_failure_after_user_delete_leaves_orphans(
        self, user_service, gateway, seed_user, monkeypatch
    ):
        await seed_user(gateway, 1, [1])

        async def broken(user_id):
            raise RuntimeError("store went away")

        monkeypatch.setattr(gateway, "delete_posts_by_user", broken)

        with pytest.raises(RuntimeError):
            await user_service.delete_user(1)

        assert await gateway.find_user(1) is None
        assert len(await gateway.find_posts_by_user(1)) == 1
        assert len(await gateway.find_comments_by_post(1)) == 2


class TestDeleteAll:
    @pytest.mark.asyncio
    async def test_empties_every_collection(self, user_service, gateway, seed_user):
        await seed_user(gateway, 1, [1])
        await seed_user(gateway, 2, [2])

        await user_service.delete_all()

        assert await gateway.find_user(1) is None
        assert await gateway.find_user(2) is None
        assert await gateway.find_comments_by_post(2) == []
