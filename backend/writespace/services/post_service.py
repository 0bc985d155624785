"""Post service."""
from datetime import datetime
from typing import List, Optional
from writespace.models.post import Post, PostStatus
from writespace.repository import Repository
from writespace.schemas.post import PostCreate, PostUpdate, PostStats
from writespace.utils.logging import get_logger

logger = get_logger(__name__)


def _display_date(post: Post) -> datetime:
    return post.published_at or post.created_at


async def create_post(
    repository: Repository,
    author_id: int,
    data: PostCreate,
) -> Post:
    """Create a new post for an author."""
    post = await repository.create_post(data, author_id)
    logger.info("Created post %s (%s) for author %s", post.id, post.status, author_id)
    return post


async def read_post(repository: Repository, post_id: int) -> Optional[Post]:
    """
    Fetch a post for a reader.

    Published posts count the read as a view and come back with the new
    count; drafts are returned as stored.
    """
    return await repository.record_view(post_id)


async def list_published_posts(
    repository: Repository,
    search: Optional[str] = None,
    category: Optional[str] = None,
    author_id: Optional[int] = None,
    sort: Optional[str] = None,
) -> List[Post]:
    """
    List published posts with filters.

    Args:
        repository: Post store
        search: Case-insensitive match against title, content and excerpt
        category: Exact category
        author_id: Exact author
        sort: newest, oldest (by publish date, falling back to creation
            date) or popular (by views). None keeps the store's order.

    Returns:
        Matching posts
    """
    posts = [p for p in await repository.get_all_posts() if p.is_published]

    if search:
        needle = search.lower()
        posts = [
            p for p in posts
            if needle in p.title.lower()
            or needle in p.content.lower()
            or (p.excerpt and needle in p.excerpt.lower())
        ]
    if category and category != "all":
        posts = [p for p in posts if p.category == category]
    if author_id is not None:
        posts = [p for p in posts if p.author_id == author_id]

    # sorted() is stable, so ties keep the store's newest-first order
    if sort == "newest":
        posts = sorted(posts, key=_display_date, reverse=True)
    elif sort == "oldest":
        posts = sorted(posts, key=_display_date)
    elif sort == "popular":
        posts = sorted(posts, key=lambda p: p.views, reverse=True)

    return posts


async def list_categories(repository: Repository) -> List[str]:
    """Distinct categories of published posts."""
    posts = await repository.get_all_posts()
    return sorted({p.category for p in posts if p.is_published})


async def list_author_posts(
    repository: Repository,
    author_id: int,
    status_filter: Optional[str] = None,
) -> List[Post]:
    """An author's posts, optionally restricted to one status."""
    posts = await repository.get_posts_by_author(author_id)
    if status_filter:
        posts = [p for p in posts if p.status == status_filter]
    return posts


async def get_author_stats(repository: Repository, author_id: int) -> PostStats:
    """Dashboard counters for an author."""
    posts = await repository.get_posts_by_author(author_id)
    published = sum(1 for p in posts if p.status == PostStatus.PUBLISHED.value)
    return PostStats(
        total=len(posts),
        published=published,
        drafts=len(posts) - published,
        total_views=sum(p.views for p in posts),
    )


async def update_post(
    repository: Repository,
    post_id: int,
    data: PostUpdate,
) -> Optional[Post]:
    """Update a post."""
    post = await repository.update_post(post_id, data)
    if post and data.status is not None:
        logger.info("Post %s is now %s", post_id, post.status)
    return post


async def delete_post(repository: Repository, post_id: int) -> bool:
    """Delete a post."""
    deleted = await repository.delete_post(post_id)
    if deleted:
        logger.info("Deleted post %s", post_id)
    return deleted
