"""Post router."""

from post_api.core.database import get_session
from post_api.core.bases.base_router import BaseRouter
from post_api.apps.blog.services.post_service import PostService
from post_api.apps.blog.repositories.post_repository import PostRepository
from post_api.apps.blog.schemas.post import PostCreate, PostRead, PostUpdate


def get_post_repository():
    """Get post repository instance."""
    return PostRepository(get_session)


def get_post_service():
    """Get post service instance."""
    repository = get_post_repository()
    return PostService(repository)


class PostRouter(BaseRouter):
    """Post router class."""

    def __init__(self):
        super().__init__(
            service_factory=get_post_service,
            create_schema=PostCreate,
            update_schema=PostUpdate,
            read_schema=PostRead,
            prefix="/posts",
            tags=["Posts"]
        )


# Router instance
router = PostRouter().get_router()
