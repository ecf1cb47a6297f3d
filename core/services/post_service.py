# =============================================================================
# core/services/post_service.py - Post Business Logic
# =============================================================================
# Handles posts and their embedded likes and comments.
#
# Likes and comments are edited with the pure list functions in
# lib/subdocuments.py and the whole post is then saved back. Two concurrent
# edits of the same post can overwrite each other; nothing here serialises
# them.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.exceptions import (
    CommentNotFoundError,
    ForbiddenError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from core.models.post import CommentCreate, PostCreate
from lib.mongo_client import POSTS, USERS, MongoStore
from lib.subdocuments import (
    AlreadyLikedError,
    NotLikedError,
    find_entry,
    insert_entry,
    remove_by_entry_id,
    remove_like,
    toggle_like,
)
from lib.utils import same_id, to_object_id

logger = logging.getLogger(__name__)


class PostService:
    """
    Service for posts, likes and comments.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, store: MongoStore):
        self.store = store

    def _author(self, user_id: str) -> dict[str, Any]:
        """Load the name/avatar snapshot stored with posts and comments."""
        user = self.store.find_by_id(USERS, user_id, {"name": 1, "avatar": 1})
        if not user:
            raise UserNotFoundError(str(user_id))
        return user

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def create_post(self, user_id: str, data: PostCreate) -> dict[str, Any]:
        """Create a post authored by `user_id`."""
        author = self._author(user_id)
        post = self.store.create(POSTS, {
            "user": author["_id"],
            "text": data.text,
            "name": author.get("name"),
            "avatar": author.get("avatar"),
            "likes": [],
            "comments": [],
            "date": datetime.now(timezone.utc),
        })
        logger.info(f"Created post {post['_id']} for user {user_id}")
        return post

    def list_posts(self) -> list[dict[str, Any]]:
        """All posts, newest first."""
        return self.store.find(POSTS, sort=[("date", -1)])

    def get_post(self, post_id: str) -> dict[str, Any]:
        """
        Fetch one post.

        Raises:
            PostNotFoundError: If the id is malformed or unknown
        """
        post = self.store.find_by_id(POSTS, post_id)
        if not post:
            raise PostNotFoundError(post_id)
        return post

    def delete_post(self, post_id: str, user_id: str) -> None:
        """
        Delete a post owned by `user_id`.

        Raises:
            PostNotFoundError: If the post does not exist
            ForbiddenError: If the caller is not the author
        """
        post = self.get_post(post_id)
        if not same_id(post.get("user"), user_id):
            logger.warning(f"User {user_id} tried to delete post {post_id}")
            raise ForbiddenError()

        self.store.find_one_and_remove(POSTS, {"_id": post["_id"]})
        logger.info(f"Deleted post {post_id}")

    # -------------------------------------------------------------------------
    # Likes
    # -------------------------------------------------------------------------

    def like_post(self, post_id: str, user_id: str) -> list[dict[str, Any]]:
        """
        Add the caller's like to a post.

        Returns:
            The post's likes, newest first

        Raises:
            PostAlreadyLikedError: If the caller already likes the post
        """
        post = self.get_post(post_id)
        try:
            post["likes"] = toggle_like(post.get("likes", []), to_object_id(user_id))
        except AlreadyLikedError:
            raise PostAlreadyLikedError(post_id)

        self.store.save(POSTS, post)
        return post["likes"]

    def unlike_post(self, post_id: str, user_id: str) -> list[dict[str, Any]]:
        """
        Remove the caller's like from a post.

        Raises:
            PostNotLikedError: If the caller does not like the post
        """
        post = self.get_post(post_id)
        try:
            post["likes"] = remove_like(post.get("likes", []), user_id)
        except NotLikedError:
            raise PostNotLikedError(post_id)

        self.store.save(POSTS, post)
        return post["likes"]

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def add_comment(self, post_id: str, user_id: str, data: CommentCreate) -> list[dict[str, Any]]:
        """
        Prepend a comment by `user_id`.

        Returns:
            The post's comments, newest first
        """
        author = self._author(user_id)
        post = self.get_post(post_id)
        post["comments"] = insert_entry(post.get("comments", []), {
            "user": author["_id"],
            "text": data.text,
            "name": author.get("name"),
            "avatar": author.get("avatar"),
            "date": datetime.now(timezone.utc),
        })

        self.store.save(POSTS, post)
        logger.info(f"Added comment {post['comments'][0]['_id']} to post {post_id}")
        return post["comments"]

    def remove_comment(self, post_id: str, comment_id: str, user_id: str) -> list[dict[str, Any]]:
        """
        Remove a comment by its own id.

        Only the comment's author may remove it.

        Raises:
            PostNotFoundError: If the post does not exist
            CommentNotFoundError: If no comment has `comment_id`
            ForbiddenError: If the caller did not write the comment
        """
        post = self.get_post(post_id)
        comments = post.get("comments", [])

        comment = find_entry(comments, comment_id)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        if not same_id(comment.get("user"), user_id):
            logger.warning(f"User {user_id} tried to delete comment {comment_id}")
            raise ForbiddenError()

        post["comments"] = remove_by_entry_id(comments, comment_id).entries
        self.store.save(POSTS, post)
        logger.info(f"Removed comment {comment_id} from post {post_id}")
        return post["comments"]
