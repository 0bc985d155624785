import asyncio
from datetime import datetime

from writespace.models.post import PostStatus
from writespace.schemas.post import PostUpdate


async def test_create_post_defaults(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    assert post.id == 1
    assert post.views == 0
    assert post.status == PostStatus.DRAFT.value
    assert post.published_at is None
    assert post.created_at == post.updated_at
    assert post.tags == ["x"]


async def test_create_published_post_stamps_published_at(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    assert post.published_at == post.created_at


async def test_create_post_does_not_check_author(repository, post_data):
    post = await repository.create_post(post_data(), author_id=999)

    assert (await repository.get_post(post.id)).author_id == 999


async def test_published_at_is_set_once(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    first = await repository.update_post(post.id, PostUpdate(status="published"))
    assert first.published_at is not None
    first_published_at = first.published_at

    await repository.update_post(post.id, PostUpdate(status="draft"))
    back_to_draft = await repository.get_post(post.id)
    assert back_to_draft.status == "draft"
    assert back_to_draft.published_at == first_published_at

    again = await repository.update_post(post.id, PostUpdate(status="published"))
    assert again.published_at == first_published_at


async def test_same_state_update_keeps_published_at(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    updated = await repository.update_post(post.id, PostUpdate(status="published"))

    assert updated.published_at == post.published_at


async def test_update_refreshes_updated_at(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    updated = await repository.update_post(post.id, PostUpdate(title="B"))

    assert updated.title == "B"
    assert updated.updated_at >= updated.created_at
    assert updated.created_at == post.created_at


async def test_update_only_touches_fields_in_patch(repository, post_data):
    post = await repository.create_post(post_data(excerpt="short"), author_id=1)

    updated = await repository.update_post(post.id, PostUpdate(tags=["y", "y", ""]))

    assert updated.tags == ["y", "y", ""]
    assert updated.title == "A"
    assert updated.content == "hello world"
    assert updated.excerpt == "short"


async def test_update_can_clear_excerpt(repository, post_data):
    post = await repository.create_post(post_data(excerpt="short"), author_id=1)

    updated = await repository.update_post(post.id, PostUpdate(excerpt=None))

    assert updated.excerpt is None


async def test_update_ignores_published_at_in_payload(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    patch = PostUpdate.model_validate({"publishedAt": None, "views": 100, "status": "draft"})
    updated = await repository.update_post(post.id, patch)

    assert updated.published_at == post.published_at
    assert updated.views == 0


async def test_update_unknown_post_returns_none(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    assert await repository.update_post(post.id + 1, PostUpdate(title="B")) is None

    stored = await repository.get_post(post.id)
    assert stored.title == "A"
    assert stored.updated_at == post.updated_at


async def test_get_all_posts_newest_first(repository, post_data):
    for title in ("first", "second", "third"):
        await repository.create_post(post_data(title=title), author_id=1)

    posts = await repository.get_all_posts()

    assert [p.title for p in posts] == ["third", "second", "first"]
    assert all(a.created_at >= b.created_at for a, b in zip(posts, posts[1:]))


async def test_get_all_posts_includes_every_status(repository, post_data):
    await repository.create_post(post_data(status="published"), author_id=1)
    await repository.create_post(post_data(status="draft"), author_id=1)

    statuses = {p.status for p in await repository.get_all_posts()}

    assert statuses == {"draft", "published"}


async def test_get_posts_by_author(repository, post_data):
    await repository.create_post(post_data(title="mine"), author_id=1)
    await repository.create_post(post_data(title="theirs"), author_id=2)
    await repository.create_post(post_data(title="mine too"), author_id=1)

    posts = await repository.get_posts_by_author(1)

    assert [p.title for p in posts] == ["mine too", "mine"]


async def test_delete_post_twice(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    assert await repository.delete_post(post.id) is True
    assert await repository.delete_post(post.id) is False
    assert await repository.get_post(post.id) is None
    assert await repository.get_all_posts() == []


async def test_ids_are_not_reused_after_delete(repository, post_data):
    first = await repository.create_post(post_data(), author_id=1)
    second = await repository.create_post(post_data(), author_id=1)
    await repository.delete_post(second.id)

    third = await repository.create_post(post_data(), author_id=1)

    assert first.id < second.id < third.id


async def test_increment_views(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    await repository.increment_views(post.id)
    await repository.increment_views(post.id)

    assert (await repository.get_post(post.id)).views == 2


async def test_increment_views_unknown_post_is_noop(repository):
    await repository.increment_views(42)

    assert await repository.get_post(42) is None


async def test_concurrent_increments_are_not_lost(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    await asyncio.gather(*(repository.increment_views(post.id) for _ in range(50)))

    assert (await repository.get_post(post.id)).views == 50


async def test_concurrent_creates_get_distinct_ids(repository, post_data):
    posts = await asyncio.gather(
        *(repository.create_post(post_data(title=str(i)), author_id=1) for i in range(20))
    )

    assert len({p.id for p in posts}) == 20


async def test_returned_posts_are_copies(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    post.title = "changed outside"
    post.tags.append("leak")

    stored = await repository.get_post(post.id)
    assert stored.title == "A"
    assert stored.tags == ["x"]


async def test_create_and_get_user(repository):
    user = await repository.create_user("Ada", "ada@writespace.io", "hash")

    assert user.id == 1
    assert user.created_at is not None
    assert (await repository.get_user(user.id)).email == "ada@writespace.io"
    assert await repository.get_user(2) is None


async def test_get_user_by_email_first_match_wins(repository):
    first = await repository.create_user("Ada", "ada@writespace.io", "hash")
    await repository.create_user("Ada Again", "ada@writespace.io", "hash")

    found = await repository.get_user_by_email("ada@writespace.io")

    assert found.id == first.id
    assert await repository.get_user_by_email("nobody@writespace.io") is None


async def test_create_user_if_email_free(repository):
    user = await repository.create_user_if_email_free("Ada", "ada@writespace.io", "hash")
    duplicate = await repository.create_user_if_email_free("Eve", "ada@writespace.io", "hash")

    assert user is not None
    assert duplicate is None


async def test_equal_created_at_orders_later_id_first(repository, post_data, monkeypatch):
    fixed = datetime(2026, 1, 1, 12, 0, 0)
    monkeypatch.setattr("writespace.repository.utcnow", lambda: fixed)

    first = await repository.create_post(post_data(title="first"), author_id=1)
    second = await repository.create_post(post_data(title="second"), author_id=1)
    assert first.created_at == second.created_at

    everything = await repository.get_all_posts()
    by_author = await repository.get_posts_by_author(1)

    assert [p.id for p in everything] == [second.id, first.id]
    assert [p.id for p in by_author] == [second.id, first.id]


async def test_record_view_counts_published_posts(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    assert (await repository.record_view(post.id)).views == 1
    assert (await repository.record_view(post.id)).views == 2
    assert (await repository.get_post(post.id)).views == 2


async def test_record_view_leaves_drafts_and_unknown_ids(repository, post_data):
    post = await repository.create_post(post_data(), author_id=1)

    assert (await repository.record_view(post.id)).views == 0
    assert await repository.record_view(post.id + 1) is None
    assert (await repository.get_post(post.id)).views == 0


async def test_draft_never_gains_views_during_concurrent_unpublish(repository, post_data):
    post = await repository.create_post(post_data(status="published"), author_id=1)

    results = await asyncio.gather(
        repository.record_view(post.id),
        repository.update_post(post.id, PostUpdate(status="draft")),
        repository.record_view(post.id),
    )

    stored = await repository.get_post(post.id)
    assert stored.status == "draft"
    assert stored.views == 1
    assert results[0].views == 1
    assert results[2].views == 1
