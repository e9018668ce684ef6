import threading
from typing import Dict, List

from app.core.exceptions import NotFoundError
from app.modules.posts.schemas.post import Post
from app.modules.posts.services.store import PostStore, VersionConflictError, new_post_id


class InMemoryPostStore(PostStore):
    """Process-local post store. Posts are copied in and out so callers never share state with it."""

    def __init__(self):
        self._posts: Dict[str, Post] = {}
        self._lock = threading.Lock()

    def insert(self, post: Post) -> Post:
        stored = post.model_copy(update={"id": post.id or new_post_id(), "version": 1}, deep=True)
        with self._lock:
            self._posts[stored.id] = stored
        return stored.model_copy(deep=True)

    def find_by_id(self, post_id: str) -> Post:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                raise NotFoundError("Post not found")
            return post.model_copy(deep=True)

    def find_all(self) -> List[Post]:
        with self._lock:
            return [post.model_copy(deep=True) for post in self._posts.values()]

    def save(self, post: Post) -> Post:
        with self._lock:
            current = self._posts.get(post.id)
            if current is None:
                raise NotFoundError("Post not found")
            if current.version != post.version:
                raise VersionConflictError(post.id, post.version)
            stored = post.model_copy(update={"version": post.version + 1}, deep=True)
            self._posts[post.id] = stored
        return stored.model_copy(deep=True)

    def delete(self, post_id: str) -> None:
        with self._lock:
            if self._posts.pop(post_id, None) is None:
                raise NotFoundError("Post not found")
