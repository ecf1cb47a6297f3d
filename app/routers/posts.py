# =============================================================================
# app/routers/posts.py - Post Endpoints
# =============================================================================
# All endpoints require authentication.
#
# Endpoints:
# - POST   /: Create a post
# - GET    /: All posts, newest first
# - GET    /{post_id}: One post
# - DELETE /{post_id}: Delete own post
# - PUT    /like/{post_id}, PUT /unlike/{post_id}
# - POST   /comment/{post_id}
# - DELETE /comment/{post_id}/{comment_id}
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import PostServiceDep
from core.models.post import CommentCreate, MessageResponse, PostCreate
from lib.utils import serialize_document

router = APIRouter()

PostId = Annotated[str, Path(description="Post id")]


# =============================================================================
# Posts
# =============================================================================

@router.post("")
def create_post(
    request: PostCreate,
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Create a post. Author name and avatar are copied from the user."""
    return serialize_document(posts.create_post(user.id, request))


@router.get("")
def list_posts(
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Get all posts, newest first."""
    return serialize_document(posts.list_posts())


@router.get("/{post_id}")
def get_post(
    post_id: PostId,
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get a post by id.

    Raises:
        404: If the post does not exist or the id is malformed
    """
    return serialize_document(posts.get_post(post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: PostId,
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> MessageResponse:
    """
    Delete a post.

    Raises:
        403: If the caller is not the author
        404: If the post does not exist
    """
    posts.delete_post(post_id, user.id)
    return MessageResponse(msg="Post removed")


# =============================================================================
# Likes
# =============================================================================

@router.put("/like/{post_id}")
def like_post(
    post_id: PostId,
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Like a post. Returns the post's likes.

    Raises:
        400: If the caller already likes the post
    """
    return serialize_document(posts.like_post(post_id, user.id))


@router.put("/unlike/{post_id}")
def unlike_post(
    post_id: PostId,
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Remove the caller's like. Returns the post's likes.

    Raises:
        400: If the caller has not liked the post
    """
    return serialize_document(posts.unlike_post(post_id, user.id))


# =============================================================================
# Comments
# =============================================================================

@router.post("/comment/{post_id}")
def add_comment(
    post_id: PostId,
    request: CommentCreate,
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Comment on a post. Returns the post's comments, newest first."""
    return serialize_document(posts.add_comment(post_id, user.id, request))


@router.delete("/comment/{post_id}/{comment_id}")
def delete_comment(
    post_id: PostId,
    comment_id: Annotated[str, Path(description="Comment id")],
    posts: PostServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete one of the caller's comments. Returns the remaining comments.

    Raises:
        403: If the caller did not write the comment
        404: If the post or comment does not exist
    """
    return serialize_document(posts.remove_comment(post_id, comment_id, user.id))
