"""Post service."""

import logging
from typing import Optional

from post_api.core.bases.base_service import BaseService
from post_api.apps.blog.repositories.post_repository import PostRepository
from post_api.apps.blog.models.post import Post


class PostService(BaseService[Post]):
    """Post service class."""

    def __init__(self, repository: PostRepository, logger: Optional[logging.Logger] = None):
        super().__init__(repository, logger=logger or logging.getLogger(__name__))
