import pytest
from fastapi.testclient import TestClient

from writespace.config import Settings
from writespace.main import create_app
from writespace.repository import Repository
from writespace.schemas.post import PostCreate

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def repository():
    repo = Repository.from_url(MEMORY_URL)
    await repo.init()
    yield repo
    await repo.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, database_url=MEMORY_URL, openai_api_key="")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def make_post(**overrides) -> PostCreate:
    data = {
        "title": "A",
        "content": "hello world",
        "category": "technology",
        "tags": ["x"],
        "status": "draft",
    }
    data.update(overrides)
    return PostCreate(**data)


def signup(client: TestClient, email: str = "ada@writespace.io", name: str = "Ada") -> dict:
    response = client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": "s3cret"},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def create_post(client: TestClient, headers: dict, **overrides) -> dict:
    body = make_post(**overrides).model_dump(by_alias=True)
    response = client.post("/api/posts", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client) -> dict:
    return signup(client)


@pytest.fixture
def post_data():
    return make_post


@pytest.fixture
def register():
    return signup


@pytest.fixture
def add_post():
    return create_post
