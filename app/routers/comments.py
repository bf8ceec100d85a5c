from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from app.dependencies import ResourceId
from app.schemas import CommentResponse, VoteUpdate
from app.services import operations

router = APIRouter(prefix="/api/comments", tags=["comments"])

@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: ResourceId, db: AsyncSession = Depends(get_db)):
    await operations.delete_comment(db, comment_id)

@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment_votes(comment_id: ResourceId, data: VoteUpdate, db: AsyncSession = Depends(get_db)):
    return await operations.update_comment_votes(db, comment_id, data.inc_votes)
