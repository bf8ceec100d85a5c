from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from app.database import get_db, get_sessionmaker
from app.dependencies import ArticleQueryParams, ResourceId
from app.schemas import (
    ArticleDetail,
    ArticleEnvelope,
    ArticleSummary,
    CommentCreate,
    CommentEnvelope,
    CommentResponse,
    VoteUpdate,
)
from app.services import article_service, operations

router = APIRouter(prefix="/api/articles", tags=["articles"])

@router.get("", response_model=list[ArticleSummary])
async def list_articles(
    params: ArticleQueryParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await article_service.list_articles(db, params.topic, params.sort_by, params.order_by)

@router.get("/{article_id}", response_model=ArticleDetail)
async def get_article(article_id: ResourceId, db: AsyncSession = Depends(get_db)):
    return await operations.fetch_article(db, article_id)

@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def update_article_votes(article_id: ResourceId, data: VoteUpdate, db: AsyncSession = Depends(get_db)):
    article = await operations.update_article_votes(db, article_id, data.inc_votes)
    return {"article": article}

@router.get("/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: ResourceId,
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    return await operations.fetch_comments_for_article(sessions, article_id)

@router.post("/{article_id}/comments", status_code=201, response_model=CommentEnvelope)
async def add_comment(article_id: ResourceId, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    comment = await operations.create_comment(db, article_id, data)
    return {"comment": comment}
