from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import envelope
from core.security import CurrentUser
from routers.auth import get_current_user
from schemas.user_check import CheckIn
from services.check_services import CheckServices

router = APIRouter(prefix="/user/check", tags=["check"])


@router.post("/get")
async def get_check_data(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CheckServices(db)
    return envelope(data=svc.get_dates(user_id=user.id))


@router.post("/add")
async def add_user_check(
    data: CheckIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CheckServices(db)
    dates, added = svc.add_date(user_id=user.id, check_date=data.date.isoformat())
    message = "Check-in recorded" if added else "Already checked in today"
    return envelope(message=message, data=dates)
