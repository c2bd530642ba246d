from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import envelope
from core.security import CurrentUser
from routers.auth import get_current_user
from services.word_services import WordServices

router = APIRouter(tags=["words"])


@router.api_route("/words/get", methods=["GET", "POST"])
async def word_list(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = WordServices(db)
    return envelope(data={"words": [word.as_dict() for word in svc.list_words()]})


@router.get("/wordCategories/get")
async def word_category_list(db: Session = Depends(get_db)):
    svc = WordServices(db)
    return envelope(data={"categoryList": svc.category_tree()})
