"""In-process store that owns every user and post record."""
import asyncio
from fastapi import Request
from typing import List, Optional
from sqlalchemy import select, desc, update, delete
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from writespace.database import Base, create_engine, utcnow
from writespace.models.post import Post, PostStatus
from writespace.models.user import User
from writespace.schemas.post import PostCreate, PostUpdate


class Repository:
    """
    Sole source of truth for users and posts.

    Every operation runs in its own session under one lock, so counters,
    check-then-insert and read-modify-write steps never interleave. Returned
    entities are detached from the session: changing them does not change
    the stored record.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
        self._lock = asyncio.Lock()

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "Repository":
        return cls(create_engine(database_url, echo=echo))

    async def init(self) -> None:
        """Create all tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    # Users

    async def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Create a user without checking email uniqueness."""
        async with self._lock:
            return await self._insert_user(name, email, password_hash)

    async def create_user_if_email_free(
        self,
        name: str,
        email: str,
        password_hash: str,
    ) -> Optional[User]:
        """Create a user unless the email is taken; None when it is."""
        async with self._lock:
            if await self._find_user_by_email(email) is not None:
                return None
            return await self._insert_user(name, email, password_hash)

    async def get_user(self, user_id: int) -> Optional[User]:
        async with self._lock, self._sessionmaker() as db:
            return await db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """First user (lowest id) with this email."""
        async with self._lock:
            return await self._find_user_by_email(email)

    async def _find_user_by_email(self, email: str) -> Optional[User]:
        async with self._sessionmaker() as db:
            result = await db.execute(
                select(User).where(User.email == email).order_by(User.id).limit(1)
            )
            return result.scalar_one_or_none()

    async def _insert_user(self, name: str, email: str, password_hash: str) -> User:
        async with self._sessionmaker() as db:
            user = User(
                name=name,
                email=email,
                password_hash=password_hash,
                created_at=utcnow(),
            )
            db.add(user)
            await db.commit()
            return user

    # Posts

    async def create_post(self, data: PostCreate, author_id: int) -> Post:
        """Create a post; published_at is stamped when it starts out published."""
        async with self._lock, self._sessionmaker() as db:
            now = utcnow()
            post = Post(
                title=data.title,
                excerpt=data.excerpt,
                content=data.content,
                category=data.category,
                tags=list(data.tags),
                author_id=author_id,
                status=data.status,
                views=0,
                created_at=now,
                updated_at=now,
                published_at=now if data.status == PostStatus.PUBLISHED.value else None,
            )
            db.add(post)
            await db.commit()
            return post

    async def get_post(self, post_id: int) -> Optional[Post]:
        async with self._lock, self._sessionmaker() as db:
            return await db.get(Post, post_id)

    async def get_all_posts(self) -> List[Post]:
        """All posts of any status, newest first."""
        async with self._lock, self._sessionmaker() as db:
            result = await db.execute(
                select(Post).order_by(desc(Post.created_at), desc(Post.id))
            )
            return list(result.scalars().all())

    async def get_posts_by_author(self, author_id: int) -> List[Post]:
        """An author's posts of any status, newest first."""
        async with self._lock, self._sessionmaker() as db:
            result = await db.execute(
                select(Post)
                .where(Post.author_id == author_id)
                .order_by(desc(Post.created_at), desc(Post.id))
            )
            return list(result.scalars().all())

    async def update_post(self, post_id: int, patch: PostUpdate) -> Optional[Post]:
        """
        Apply the fields set in ``patch`` to a post.

        updated_at is always refreshed. published_at is only ever set, the
        first time the post becomes published, and is never cleared.
        Returns None (and changes nothing) for an unknown id.
        """
        async with self._lock, self._sessionmaker() as db:
            post = await db.get(Post, post_id)
            if not post:
                return None

            update_data = patch.model_dump(exclude_unset=True)
            for key, value in update_data.items():
                setattr(post, key, value)

            # updated_at never precedes created_at
            now = max(utcnow(), post.created_at)
            post.updated_at = now
            if update_data.get("status") == PostStatus.PUBLISHED.value and post.published_at is None:
                post.published_at = now

            await db.commit()
            return post

    async def delete_post(self, post_id: int) -> bool:
        async with self._lock, self._sessionmaker() as db:
            result = await db.execute(delete(Post).where(Post.id == post_id))
            await db.commit()
            return result.rowcount > 0

    async def increment_views(self, post_id: int) -> None:
        """Add one view; does nothing for an unknown id."""
        async with self._lock, self._sessionmaker() as db:
            await db.execute(
                update(Post).where(Post.id == post_id).values(views=Post.views + 1)
            )
            await db.commit()

    async def record_view(self, post_id: int) -> Optional[Post]:
        """
        Count a read of a published post and return the post.

        The status check and the increment happen under one lock, so a post
        moved back to draft concurrently never gains a view. Drafts come back
        unchanged; unknown ids return None.
        """
        async with self._lock, self._sessionmaker() as db:
            post = await db.get(Post, post_id)
            if post and post.is_published:
                post.views = post.views + 1
                await db.commit()
            return post


def get_repository(request: Request) -> Repository:
    """Dependency returning the repository built at start-up."""
    return request.app.state.repository
