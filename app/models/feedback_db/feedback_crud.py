from typing import List
from sqlalchemy.orm import Session
from app.models.feedback_db.feedback_db import Feedback


def create_feedback(db: Session, event_id: int, user_id: int, rating: int, comments: str) -> Feedback:
    feedback = Feedback(event_id=event_id, user_id=user_id, rating=rating, comments=comments or "")
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


def list_feedback(db: Session, event_id: int) -> List[Feedback]:
    return (
        db.query(Feedback)
        .filter(Feedback.event_id == event_id)
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .all()
    )
