"""Post repository."""

from post_api.core.bases.base_repository import BaseRepository
from post_api.apps.blog.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post
