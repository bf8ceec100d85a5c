from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Topic ---

class TopicResponse(BaseModel):
    slug: str
    description: str
    model_config = ConfigDict(from_attributes=True)


# --- User ---

class UserResponse(BaseModel):
    username: str
    name: str
    avatar_url: str
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentCreate(BaseModel):
    """
    Body of ``POST /api/articles/{id}/comments``.

    Both fields default to empty so that a missing field reaches the
    service as an empty-field violation rather than a schema error.
    Unknown keys are dropped.
    """
    username: str = ""
    body: str = ""
    model_config = ConfigDict(extra="ignore")


class CommentResponse(BaseModel):
    comment_id: int
    article_id: int
    author: str
    body: str
    votes: int
    created_at: datetime


class CommentEnvelope(BaseModel):
    comment: CommentResponse


# --- Votes ---

# Vote counts and primary keys are 32-bit INTEGER columns.
INT32_MAX = 2_147_483_647


class VoteUpdate(BaseModel):
    """
    Body of the vote PATCH endpoints.

    Numeric strings are coerced; booleans are not a vote delta.
    """
    inc_votes: int = Field(ge=-INT32_MAX - 1, le=INT32_MAX)
    model_config = ConfigDict(extra="ignore")

    @field_validator("inc_votes", mode="before")
    @classmethod
    def reject_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("inc_votes must be an integer")
        return value


# --- Article ---

class ArticleSummary(BaseModel):
    article_id: int
    title: str
    topic: str
    author: str
    created_at: datetime
    votes: int
    article_img_url: str
    comment_count: int


class ArticleDetail(ArticleSummary):
    body: str


class ArticleResponse(BaseModel):
    """Article row as stored (no derived ``comment_count``)."""
    article_id: int
    title: str
    topic: str
    author: str
    body: str
    created_at: datetime
    votes: int
    article_img_url: str


class ArticleEnvelope(BaseModel):
    article: ArticleResponse


# --- Health ---

class HealthResponse(BaseModel):
    status: str
    version: str
