"""Database initialization script.

Only useful with a persistent DATABASE_URL, e.g.
``DATABASE_URL=sqlite+aiosqlite:///./writespace.db python backend/scripts/init_db.py``.
"""
import asyncio
from writespace.config import get_settings
from writespace.repository import Repository
from writespace.schemas.post import PostCreate
from writespace.services.auth_service import hash_password

DEMO_EMAIL = "demo@writespace.example.com"

DEMO_POSTS = [
    PostCreate(
        title="Welcome to WriteSpace",
        excerpt="A quick tour of the editor.",
        content="WriteSpace lets you draft, publish and get feedback on your writing.",
        category="lifestyle",
        tags=["welcome", "guide"],
        status="published",
    ),
    PostCreate(
        title="Notes on async Python",
        content="Work in progress.",
        category="technology",
        tags=["python"],
    ),
]


async def init_database():
    """Create all tables and seed a demo author."""
    settings = get_settings()
    repository = Repository.from_url(settings.database_url)

    print("Creating database tables...")
    await repository.init()
    print("Tables created successfully!")

    user = await repository.create_user_if_email_free(
        name="Demo Author",
        email=DEMO_EMAIL,
        password_hash=hash_password("writespace123"),
    )
    if user is None:
        print("Demo author already exists.")
    else:
        print("Creating demo posts...")
        for data in DEMO_POSTS:
            await repository.create_post(data, user.id)
        print(f"Demo author created: {DEMO_EMAIL} / writespace123")

    await repository.dispose()
    print("Database initialization complete!")


if __name__ == "__main__":
    asyncio.run(init_database())
