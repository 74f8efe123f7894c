from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.security import Identity, require_student
from app.models.feedback_db.feedback_crud import create_feedback, list_feedback
from app.schemas.common.message import MessageOut
from app.schemas.feedback.feedback_base import FeedbackCreate, FeedbackOut
from app.services.events import get_event_or_404

feedback_router = APIRouter(prefix="/api/events", tags=["Feedback"])


@feedback_router.get("/{event_id}/feedback", response_model=List[FeedbackOut])
def get_feedback(event_id: int, db: Session = Depends(get_db)):
    return list_feedback(db, event_id)


@feedback_router.post("/{event_id}/feedback", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    event_id: int,
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_student),
):
    get_event_or_404(db, event_id)
    create_feedback(db, event_id, identity.id, payload.rating, payload.comments)
    return {"message": "Feedback submitted."}
