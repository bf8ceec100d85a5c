from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.schemas import TopicResponse
from app.services import topic_service

router = APIRouter(prefix="/api/topics", tags=["topics"])

@router.get("", response_model=list[TopicResponse])
async def list_topics(db: AsyncSession = Depends(get_db)):
    return await topic_service.get_topics(db)
