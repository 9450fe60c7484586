"""Repository and service tests against a real SQLite database."""

from datetime import timedelta
from uuid import uuid4

import pytest

from post_api.apps.blog.models.post import Post
from post_api.apps.blog.schemas.post import PostCreate, PostUpdate
from post_api.core.bases.base_repository import RepositoryError
from post_api.core.config import settings
from post_api.core.exceptions import NotFoundException


class TestPostRepository:
    async def test_save_assigns_id(self, post_repository):
        post = await post_repository.save(Post(title="a", contents="b"))

        assert post.id is not None
        assert post.deleted_at is None

    async def test_find_on_empty_table(self, post_repository):
        assert await post_repository.find() == []

    async def test_find_one_by_id(self, post_repository):
        saved = await post_repository.save(Post(title="a", contents="b"))

        found = await post_repository.find_one(id=saved.id)

        assert found is not None
        assert found.title == "a"

    async def test_find_one_missing_returns_none(self, post_repository):
        assert await post_repository.find_one(id=uuid4()) is None

    async def test_find_one_unknown_field(self, post_repository):
        with pytest.raises(RepositoryError):
            await post_repository.find_one(author="nobody")

    async def test_save_updates_existing_row(self, post_repository):
        saved = await post_repository.save(Post(title="a", contents="b"))
        saved.title = "changed"

        updated = await post_repository.save(saved)

        assert updated.id == saved.id
        assert updated.title == "changed"
        assert updated.updated_at is not None
        assert len(await post_repository.find()) == 1

    async def test_soft_delete_keeps_row(self, post_repository):
        saved = await post_repository.save(Post(title="a", contents="b"))

        result = await post_repository.soft_delete(id=saved.id)

        assert result.affected == 1
        assert await post_repository.find_one(id=saved.id) is None
        kept = await post_repository.find_one(include_deleted=True, id=saved.id)
        assert kept is not None
        assert kept.deleted_at is not None

    async def test_soft_delete_does_not_restamp(self, post_repository):
        saved = await post_repository.save(Post(title="a", contents="b"))
        await post_repository.soft_delete(id=saved.id)
        first = await post_repository.find_one(include_deleted=True, id=saved.id)

        result = await post_repository.soft_delete(id=saved.id)

        assert result.affected == 0
        again = await post_repository.find_one(include_deleted=True, id=saved.id)
        assert again.deleted_at == first.deleted_at


class TestPostServiceRoundTrip:
    async def test_create_then_find_one(self, post_service):
        created = await post_service.create(PostCreate(title="hello", contents="world"))

        found = await post_service.find_one(created.id)

        assert found.id == created.id
        assert found.title == "hello"
        assert found.contents == "world"

    async def test_find_all_after_creates(self, post_service):
        created = [
            await post_service.create(PostCreate(title=f"t{i}", contents="c"))
            for i in range(3)
        ]

        posts = await post_service.find_all()

        assert len(posts) == 3
        assert {p.id for p in posts} == {p.id for p in created}

    async def test_update_merges_and_persists(self, post_service):
        created = await post_service.create(PostCreate(title="old", contents="c"))

        await post_service.update(created.id, PostUpdate(title="new"))
        stored = await post_service.find_one(created.id)

        assert stored.title == "new"
        assert stored.contents == "c"
        assert stored.id == created.id

    async def test_remove_then_lookups_fail(self, post_service, post_repository):
        created = await post_service.create(PostCreate(title="t", contents="c"))

        result = await post_service.remove(created.id)

        assert result.affected == 1
        with pytest.raises(NotFoundException):
            await post_service.find_one(created.id)
        with pytest.raises(NotFoundException):
            await post_service.remove(created.id)
        assert await post_service.find_all() == []
        assert await post_repository.find_one(include_deleted=True, id=created.id) is not None

    async def test_update_of_missing_post(self, post_service):
        with pytest.raises(NotFoundException):
            await post_service.update(uuid4(), PostUpdate(title="x"))


class TestStringIds:
    async def test_find_one_with_string_id(self, post_service):
        created = await post_service.create(PostCreate(title="t", contents="c"))

        found = await post_service.find_one(str(created.id))

        assert found.id == created.id

    async def test_find_one_with_missing_string_id(self, post_service):
        missing_id = str(uuid4())

        with pytest.raises(NotFoundException) as exc_info:
            await post_service.find_one(missing_id)

        assert exc_info.value.item_id == missing_id

    async def test_find_one_with_malformed_id(self, post_service):
        with pytest.raises(NotFoundException) as exc_info:
            await post_service.find_one("not-a-uuid")

        assert exc_info.value.item_id == "not-a-uuid"

    async def test_update_with_string_id(self, post_service):
        created = await post_service.create(PostCreate(title="old", contents="c"))

        updated = await post_service.update(str(created.id), PostUpdate(title="new"))

        assert updated.id == created.id
        assert updated.title == "new"

    async def test_update_with_missing_string_id(self, post_service):
        with pytest.raises(NotFoundException):
            await post_service.update(str(uuid4()), PostUpdate(title="new"))

    async def test_remove_with_string_id(self, post_service, post_repository):
        created = await post_service.create(PostCreate(title="t", contents="c"))

        result = await post_service.remove(str(created.id))

        assert result.affected == 1
        kept = await post_repository.find_one(include_deleted=True, id=created.id)
        assert kept.deleted_at is not None

    async def test_remove_with_missing_string_id(self, post_service):
        with pytest.raises(NotFoundException):
            await post_service.remove(str(uuid4()))


class TestTimestamps:
    async def test_timestamps_keep_configured_offset(self, post_repository):
        saved = await post_repository.save(Post(title="a", contents="b"))
        await post_repository.soft_delete(id=saved.id)

        stored = await post_repository.find_one(include_deleted=True, id=saved.id)

        expected_offset = settings.get_now().utcoffset()
        assert stored.created_at.utcoffset() == expected_offset
        assert stored.deleted_at.utcoffset() == expected_offset

    async def test_created_at_round_trips_same_instant(self, post_repository):
        post = Post(title="a", contents="b")
        written = post.created_at

        saved = await post_repository.save(post)

        stored = await post_repository.find_one(id=saved.id)
        assert abs(stored.created_at - written) < timedelta(seconds=1)
