from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DEFAULT_ARTICLE_IMG_URL = (
    "https://images.pexels.com/photos/158651/news-newsletter-newspaper-information-158651.jpeg"
    "?w=700&h=700"
)


# ---------------------------------------------------------------------------
# Topic
# ---------------------------------------------------------------------------
class Topic(Base):
    __tablename__ = "topics"

    slug: Mapped[str] = mapped_column(String(100), primary_key=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(500), nullable=False)


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class Article(Base):
    __tablename__ = "articles"

    __table_args__ = (
        # Topic-filtered feeds sorted by date (the default listing)
        Index("ix_articles_topic_created_at", "topic", "created_at"),
    )

    article_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    topic: Mapped[str] = mapped_column(String(100), ForeignKey("topics.slug"), nullable=False)
    author: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.username"), nullable=False, index=True
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    article_img_url: Mapped[str] = mapped_column(
        String(1000), default=DEFAULT_ARTICLE_IMG_URL, nullable=False
    )


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(Base):
    __tablename__ = "comments"

    __table_args__ = (
        # Per-article comment listing, newest first
        Index("ix_comments_article_id_created_at", "article_id", "created_at"),
    )

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    article_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.article_id"), nullable=False
    )
    author: Mapped[str] = mapped_column(String(100), ForeignKey("users.username"), nullable=False)
    votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
