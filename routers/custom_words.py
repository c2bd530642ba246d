from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import envelope
from core.security import CurrentUser
from routers.auth import get_current_user
from schemas.custom_word import CustomCategoryCreateIn, CustomCategoryKeyIn, CustomWordsQueryIn
from schemas.word import MarkStatusIn, RecordMistakesIn, StatusQueryIn
from services.custom_word_services import CustomWordServices

router = APIRouter(tags=["customWords"])


@router.post("/customWordCategory/create")
async def create_custom_category(
    data: CustomCategoryCreateIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    created = svc.create_category(
        category=data.category,
        category_name=data.category_name,
        subcategory=data.subcategory,
        subcategory_name=data.subcategory_name,
        emoji=data.emoji,
        words=data.word_rows(),
    )
    return envelope(message="Custom word list created", data=created)


@router.post("/customWordCategory/delete")
async def delete_custom_category(
    data: CustomCategoryKeyIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    svc.delete_category(category=data.category, subcategory=data.subcategory)
    return envelope(message="Custom word list deleted")


@router.post("/customWordCategory/get")
async def get_custom_categories(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    return envelope(data={"categories": svc.list_categories()})


@router.post("/customWords/get")
async def get_custom_words(
    data: CustomWordsQueryIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    result = svc.list_words(category=data.category, subcategory=data.subcategory, page=data.page, limit=data.limit)
    return envelope(data=result.as_dict())


@router.post("/customWords/status/get")
async def get_custom_words_by_status(
    data: StatusQueryIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    result = svc.words_by_status(
        user_id=user.id,
        status=data.status,
        subcategory=data.subcategory,
        page=data.page,
        limit=data.limit,
    )
    return envelope(data=result.as_dict())


@router.post("/customWords/mark")
async def mark_custom_word_status(
    data: MarkStatusIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    svc.mark_status(user_id=user.id, key=data.to_key(), status=data.status)
    return envelope(message=f"Word status updated to {data.status.value}")


@router.post("/customWords/mistakes/add")
async def record_custom_word_mistake(
    data: RecordMistakesIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = CustomWordServices(db, user.id)
    svc.record_mistakes(user_id=user.id, key=data.to_key(), mistakes=data.mistake_dates())
    return envelope(message="Word mistakes recorded")
