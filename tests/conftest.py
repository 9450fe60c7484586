import os

# Point the app at a throwaway database before any settings are loaded
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_SYNCHRONIZE", "false")

from unittest.mock import AsyncMock

import pytest

from post_api.apps.blog.models.post import Post
from post_api.apps.blog.repositories.post_repository import PostRepository
from post_api.apps.blog.services.post_service import PostService
from post_api.core.database import Database


@pytest.fixture
async def database(tmp_path):
    """File backed SQLite database with the schema created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}")
    await db.create_all()
    yield db
    await db.disconnect()


@pytest.fixture
def post_repository(database):
    return PostRepository(database.get_session)


@pytest.fixture
def post_service(post_repository):
    return PostService(post_repository)


@pytest.fixture
def mock_post_repository():
    """Repository double exposing save / find / find_one / soft_delete."""
    repository = AsyncMock(spec=PostRepository)
    repository.model = Post
    return repository


@pytest.fixture
def mocked_post_service(mock_post_repository):
    return PostService(mock_post_repository)
