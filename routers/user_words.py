from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import envelope
from core.security import CurrentUser
from routers.auth import get_current_user
from schemas.word import (
    ClearMistakesIn,
    MarkStatusIn,
    MistakeDatesQueryIn,
    MistakeQueryIn,
    RecordMistakesIn,
    StatusListQueryIn,
    StatusQueryIn,
    UserWordsQueryIn,
)
from services.user_word_services import UserWordServices

router = APIRouter(prefix="/userWords", tags=["userWords"])


@router.post("/total/get")
async def get_total_data(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    return envelope(data={"total": svc.totals(user_id=user.id)})


@router.post("/get")
async def get_all_user_words(
    data: UserWordsQueryIn | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or UserWordsQueryIn()
    svc = UserWordServices(db)
    result = svc.list_words(
        user_id=user.id,
        subcategory=data.subcategory,
        status=data.status,
        page=data.page,
        limit=data.limit,
    )
    return envelope(data=result.as_dict())


@router.post("/status/get")
async def get_words_by_status(
    data: StatusQueryIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    result = svc.words_by_status(
        user_id=user.id,
        status=data.status,
        subcategory=data.subcategory,
        page=data.page,
        limit=data.limit,
    )
    return envelope(data=result.as_dict())


@router.post("/status/all/get")
async def get_all_words_by_status(
    data: StatusListQueryIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    result = svc.words_by_status_list(user_id=user.id, statuses=data.status_list, page=data.page, limit=data.limit)
    return envelope(data=result.as_dict())


@router.post("/mark")
async def mark_word_status(
    data: MarkStatusIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    svc.mark_status(user_id=user.id, key=data.to_key(), status=data.status)
    return envelope(message=f"Word status updated to {data.status.value}")


@router.post("/mistakes/add")
async def record_word_mistake(
    data: RecordMistakesIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    svc.record_mistakes(user_id=user.id, key=data.to_key(), mistakes=data.mistake_dates())
    return envelope(message="Word mistakes recorded")


@router.post("/mistakes/get")
async def get_all_mistake_words(
    data: MistakeQueryIn | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or MistakeQueryIn()
    svc = UserWordServices(db)
    result = svc.mistake_words(user_id=user.id, page=data.page, limit=data.limit)
    return envelope(data=result.as_dict())


@router.post("/mistakes/date/get")
async def get_mistake_words_by_date(
    data: MistakeDatesQueryIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    result = svc.mistake_words_by_dates(user_id=user.id, dates=data.date_strings(), page=data.page, limit=data.limit)
    return envelope(data=result.as_dict())


@router.post("/mistakes/delete")
async def delete_word_mistake(
    data: ClearMistakesIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = UserWordServices(db)
    result = svc.clear_mistakes(user_id=user.id, keys=[item.to_key() for item in data.words])
    return envelope(
        message=(
            f"Processed {result.total} words: deleted {result.deleted} records, "
            f"cleared mistakes on {result.updated}"
        ),
        data={
            "totalWords": result.total,
            "deletedRecords": result.deleted,
            "updatedRecords": result.updated,
            "notFoundRecords": result.not_found,
            "failedRecords": result.failed,
        },
    )
