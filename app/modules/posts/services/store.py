"""
Post store: the only writer of post documents.

A post is persisted as one document together with its embedded likes and
comments. ``save`` is a conditional write keyed on the document version, so a
read-modify-write cycle that lost a race is rejected instead of silently
overwriting the winner.
"""
from abc import ABC, abstractmethod
from datetime import timezone
from typing import List
import logging
import uuid

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StoreUnavailableError
from app.modules.posts.models.post import Post as PostModel
from app.modules.posts.schemas.post import Post

logger = logging.getLogger(__name__)


class VersionConflictError(Exception):
    """The stored post changed since it was read"""

    def __init__(self, post_id: str, expected_version: int):
        self.post_id = post_id
        self.expected_version = expected_version
        super().__init__(f"Post {post_id} is no longer at version {expected_version}")


class PostStore(ABC):

    @abstractmethod
    def insert(self, post: Post) -> Post:
        """Store a new post, assigning its id and version 1"""

    @abstractmethod
    def find_by_id(self, post_id: str) -> Post:
        """Return the post or raise NotFoundError"""

    @abstractmethod
    def find_all(self) -> List[Post]:
        """Return every post in no particular order"""

    @abstractmethod
    def save(self, post: Post) -> Post:
        """
        Replace the stored post if it is still at ``post.version``.

        Returns the post at its new version. Raises VersionConflictError when
        another writer got there first and NotFoundError when the post was
        deleted in the meantime.
        """

    @abstractmethod
    def delete(self, post_id: str) -> None:
        """Remove a post with its likes and comments, or raise NotFoundError"""


def new_post_id() -> str:
    return str(uuid.uuid4())


def _to_domain(row: PostModel) -> Post:
    post = Post.model_validate(row)
    # SQLite hands back naive datetimes
    if post.created_at.tzinfo is None:
        post = post.model_copy(update={"created_at": post.created_at.replace(tzinfo=timezone.utc)})
    return post


def _dump_likes(post: Post) -> list:
    return [like.model_dump(mode="json") for like in post.likes]


def _dump_comments(post: Post) -> list:
    return [comment.model_dump(mode="json") for comment in post.comments]


class SqlPostStore(PostStore):
    """Post store backed by the ``posts`` table"""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, error: DBAPIError):
        self.db.rollback()
        logger.error(f"Error while {action}: {error}")
        raise StoreUnavailableError() from error

    def insert(self, post: Post) -> Post:
        row = PostModel(
            id=post.id or new_post_id(),
            text=post.text,
            author_id=post.author_id,
            author_name=post.author_name,
            created_at=post.created_at,
            likes=_dump_likes(post),
            comments=_dump_comments(post),
            version=1,
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except DBAPIError as e:
            self._fail("inserting post", e)
        return _to_domain(row)

    def find_by_id(self, post_id: str) -> Post:
        try:
            row = (
                self.db.query(PostModel)
                .filter(PostModel.id == post_id)
                .populate_existing()
                .first()
            )
        except DBAPIError as e:
            self._fail(f"reading post {post_id}", e)
        if row is None:
            raise NotFoundError("Post not found")
        return _to_domain(row)

    def find_all(self) -> List[Post]:
        try:
            rows = self.db.query(PostModel).populate_existing().all()
        except DBAPIError as e:
            self._fail("listing posts", e)
        return [_to_domain(row) for row in rows]

    def save(self, post: Post) -> Post:
        new_version = post.version + 1
        try:
            updated = (
                self.db.query(PostModel)
                .filter(PostModel.id == post.id, PostModel.version == post.version)
                .update(
                    {
                        PostModel.likes: _dump_likes(post),
                        PostModel.comments: _dump_comments(post),
                        PostModel.version: new_version,
                    },
                    synchronize_session=False,
                )
            )
            self.db.commit()
        except DBAPIError as e:
            self._fail(f"saving post {post.id}", e)

        if updated == 0:
            # Nothing matched: either the post is gone or its version moved on
            self.find_by_id(post.id)
            raise VersionConflictError(post.id, post.version)

        return post.model_copy(update={"version": new_version})

    def delete(self, post_id: str) -> None:
        try:
            deleted = (
                self.db.query(PostModel)
                .filter(PostModel.id == post_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except DBAPIError as e:
            self._fail(f"deleting post {post_id}", e)
        if deleted == 0:
            raise NotFoundError("Post not found")
