from sqlalchemy.orm import Session

from core.errors import NotFoundError
from repositories.user_repo import UserRepository


class CheckServices:
    def __init__(self, db: Session):
        self.repo = UserRepository(db)

    def get_dates(self, *, user_id: int) -> list[str]:
        try:
            return self.repo.get_check_dates(user_id)
        except ValueError as exc:
            raise NotFoundError("User does not exist") from exc

    def add_date(self, *, user_id: int, check_date: str) -> tuple[list[str], bool]:
        try:
            return self.repo.add_check_date(user_id, check_date)
        except ValueError as exc:
            raise NotFoundError("User does not exist") from exc
