"""Notification routes."""
from fastapi import APIRouter, Depends, Query, HTTPException

from syncpanel.database import get_db
from syncpanel.models import Notification
from syncpanel.schemas.common import PaginatedResponse
from syncpanel.schemas.notification import NotificationResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=PaginatedResponse)
def get_notifications(
    db=Depends(get_db),
    limit: int = Query(20, ge=1, le=50),
    offset: int = Query(0, ge=0),
):
    qry = db.query(Notification)
    total = qry.count()
    notifs = qry.order_by(Notification.read.asc(), Notification.created_at.desc()).offset(offset).limit(limit).all()
    return {
        "data": [NotificationResponse.model_validate(n).model_dump(mode="json") for n in notifs],
        "total": total,
        "limit": limit,
        "offset": offset,
    }


@router.patch("/{notification_id}/read")
def mark_read(
    notification_id: str,
    db=Depends(get_db),
):
    n = db.query(Notification).filter(Notification.id == notification_id).first()
    if not n:
        raise HTTPException(status_code=404, detail="Notification not found")
    n.read = True
    db.commit()
    return {"message": "ok"}
