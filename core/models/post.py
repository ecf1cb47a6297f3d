# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# - PostCreate: Input for POST /api/posts
# - CommentCreate: Input for POST /api/posts/comment/{id}
#
# Author name and avatar are not part of the input; they are copied from the
# user document when the post or comment is created.
# =============================================================================

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for creating a post."""

    text: str = Field(
        ...,
        min_length=1,
        description="Post body"
    )


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    text: str = Field(
        ...,
        min_length=1,
        description="Comment body"
    )


class MessageResponse(BaseModel):
    """Plain confirmation, e.g. after a delete."""

    msg: str
