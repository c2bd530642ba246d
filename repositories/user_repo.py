from sqlalchemy.orm import Session
from sqlalchemy import select
from models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> User | None:
        return self.db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def add(self, *, email: str, password_hash: str, verification_code: str) -> User:
        user = User(
            email=email.lower(),
            password_hash=password_hash,
            verification_code=verification_code,
            check_status=[],
        )
        self.db.add(user)
        self.db.flush()
        return user

    def update_password(self, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_check_dates(self, user_id: int) -> list[str]:
        user = self.get_by_id(user_id)
        if user is None:
            raise ValueError("User not found")
        return list(user.check_status or [])

    def add_check_date(self, user_id: int, check_date: str) -> tuple[list[str], bool]:
        user = self.get_by_id(user_id)
        if user is None:
            raise ValueError("User not found")

        current = list(user.check_status or [])
        if check_date in current:
            return current, False

        # reassign so the JSON column is flagged dirty
        user.check_status = [*current, check_date]
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return list(user.check_status), True
