from datetime import datetime, timezone
from typing import Callable, List, Optional
import logging
import uuid

from app.core.config import settings
from app.core.exceptions import (
    AlreadyLikedError,
    ConcurrentUpdateError,
    NotFoundError,
    NotLikedError,
    UnauthorizedError,
    ValidationError,
)
from app.modules.posts.comments.schemas.comment import Comment
from app.modules.posts.likes.schemas.like import Like
from app.modules.posts.schemas.post import Post
from app.modules.posts.services.store import PostStore, VersionConflictError
from app.modules.user_management.services.user import UserDirectory

logger = logging.getLogger(__name__)

def _require_text(text: Optional[str]) -> str:
    if not text or not text.strip():
        raise ValidationError("Text is required")
    return text

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostService:
    """
    Post, like and comment operations for one caller at a time.

    Like and comment changes are read-modify-write cycles on the whole post
    document. They are saved conditionally on the version that was read and
    re-run from a fresh read when another writer got in first, so checks such
    as "already liked" always see the state they are applied to.
    """

    def __init__(
        self,
        store: PostStore,
        users: UserDirectory,
        max_retries: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.users = users
        self.max_retries = max_retries or settings.POST_UPDATE_MAX_RETRIES
        self.clock = clock

    def create_post(self, caller_id: str, text: str) -> Post:
        """Create new post"""
        _require_text(text)
        author_name = self.users.get_display_name(caller_id)
        logging.info(f"Creating post for author ID: {caller_id}")
        post = Post(
            author_id=caller_id,
            author_name=author_name,
            text=text,
            created_at=self.clock(),
        )
        return self.store.insert(post)

    def list_posts(self) -> List[Post]:
        """All posts, newest first"""
        return sorted(
            self.store.find_all(),
            key=lambda post: (post.created_at, post.id),
            reverse=True,
        )

    def get_post(self, post_id: str) -> Post:
        return self.store.find_by_id(post_id)

    def delete_post(self, caller_id: str, post_id: str) -> None:
        """Delete a post together with its likes and comments"""
        post = self.store.find_by_id(post_id)
        if post.author_id != caller_id:
            logger.info(f"User {caller_id} refused deletion of post {post_id}")
            raise UnauthorizedError("User is not authorized to remove this post")
        logging.info(f"Deleting post with ID: {post_id}")
        self.store.delete(post_id)

    def like_post(self, caller_id: str, post_id: str) -> List[Like]:
        def add_like(post: Post) -> Post:
            if post.has_liked(caller_id):
                raise AlreadyLikedError()
            return post.model_copy(update={"likes": [Like(user_id=caller_id)] + post.likes})

        return self._update(post_id, add_like).likes

    def unlike_post(self, caller_id: str, post_id: str) -> List[Like]:
        def remove_like(post: Post) -> Post:
            if not post.has_liked(caller_id):
                raise NotLikedError()
            likes = [like for like in post.likes if like.user_id != caller_id]
            return post.model_copy(update={"likes": likes})

        return self._update(post_id, remove_like).likes

    def add_comment(self, caller_id: str, post_id: str, text: str) -> List[Comment]:
        _require_text(text)
        self.store.find_by_id(post_id)
        comment = Comment(
            id=str(uuid.uuid4()),
            author_id=caller_id,
            author_name=self.users.get_display_name(caller_id),
            text=text,
            created_at=self.clock(),
        )

        def prepend_comment(post: Post) -> Post:
            return post.model_copy(update={"comments": [comment] + post.comments})

        return self._update(post_id, prepend_comment).comments

    def delete_comment(self, caller_id: str, post_id: str, comment_id: str) -> List[Comment]:
        def remove_comment(post: Post) -> Post:
            comment = post.find_comment(comment_id)
            if comment is None:
                raise NotFoundError("Comment does not exist")
            # Ownership of the comment, not of the post it sits under
            if comment.author_id != caller_id:
                raise UnauthorizedError("User is not authorized")
            comments = [c for c in post.comments if c.id != comment_id]
            return post.model_copy(update={"comments": comments})

        return self._update(post_id, remove_comment).comments

    def _update(self, post_id: str, mutate: Callable[[Post], Post]) -> Post:
        """Apply ``mutate`` to the current post and save it, retrying lost races"""
        for attempt in range(1, self.max_retries + 1):
            post = self.store.find_by_id(post_id)
            try:
                return self.store.save(mutate(post))
            except VersionConflictError:
                logger.info(f"Post {post_id} changed while updating (attempt {attempt}/{self.max_retries})")

        logger.warning(f"Giving up on post {post_id} after {self.max_retries} conflicting updates")
        raise ConcurrentUpdateError()
