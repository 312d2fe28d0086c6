import logging
import threading
from typing import Optional

from postbox.model.post import Post

logger = logging.getLogger(__name__)


class PostNotFoundError(KeyError):
    def __init__(self, post_id: int):
        super().__init__(post_id)
        self.post_id = post_id

    def __str__(self):
        return f"Post {self.post_id} not found"


class PostStore:
    """
    In-memory post storage.

    All reads and writes of the mapping and the id counter happen while
    holding a single lock. Posts handed back to callers are copies, so
    serialization can happen after the lock is released.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._posts: dict[int, Post] = {}
        self._next_id = 1

    def list_posts(self) -> list[Post]:
        with self._lock:
            posts = [post.model_copy() for post in self._posts.values()]
        logger.debug("Listed %d posts", len(posts))
        return posts

    def create_post(self, body: str) -> Post:
        with self._lock:
            post = Post(id=self._next_id, body=body)
            self._next_id += 1
            self._posts[post.id] = post
            created = post.model_copy()
        logger.info("Created post %d", created.id)
        return created

    def get_post(self, post_id: int) -> Post:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                raise PostNotFoundError(post_id)
            return post.model_copy()

    def update_post(self, post_id: int, body: Optional[str] = None) -> Post:
        with self._lock:
            existing = self._posts.get(post_id)
            if existing is None:
                raise PostNotFoundError(post_id)
            post = Post(id=post_id, body=existing.body if body is None else body)
            self._posts[post_id] = post
            updated = post.model_copy()
        logger.info("Updated post %d", post_id)
        return updated

    def delete_post(self, post_id: int) -> None:
        with self._lock:
            if post_id not in self._posts:
                raise PostNotFoundError(post_id)
            del self._posts[post_id]
        logger.info("Deleted post %d", post_id)

    def count(self) -> int:
        with self._lock:
            return len(self._posts)
