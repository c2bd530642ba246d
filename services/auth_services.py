import logging
import re
from typing import Union

from pydantic import SecretStr
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import ConflictError, InvalidInputError, NotFoundError
from core.security import _to_plain, hash_password, verify_password
from models.user import User
from repositories.user_repo import UserRepository
from repositories.verification_code_repo import VerificationCodeRepository

logger = logging.getLogger(__name__)

CODE_REGEX = re.compile(r"^[0-9a-zA-Z]{6}$")


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)
        self.codes = VerificationCodeRepository(db)

    def _check_code(self, code: str):
        if not code or not CODE_REGEX.fullmatch(code):
            raise InvalidInputError("Verification code must be 6 letters or digits")
        record = self.codes.get_by_code(code)
        if record is None:
            raise InvalidInputError("Verification code does not exist")
        if record.is_used:
            raise InvalidInputError("Verification code has already been used")
        return record

    def register(
        self,
        *,
        email: str,
        password: Union[str, SecretStr],
        confirm_password: Union[str, SecretStr],
        verification_code: str,
    ) -> User:
        if _to_plain(password) != _to_plain(confirm_password):
            raise InvalidInputError("Password and confirmation do not match")
        if self.repo.get_by_email(email):
            raise ConflictError("Email already registered")
        record = self._check_code(verification_code)

        try:
            self.codes.mark_used(record, email=email)
            user = self.repo.add(
                email=email,
                password_hash=hash_password(password),
                verification_code=verification_code,
            )
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Email already registered") from exc

        self.db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    def login(self, *, email: str, password: Union[str, SecretStr]) -> User:
        user = self.repo.get_by_email(email)
        if not user:
            raise InvalidInputError("Email is not registered")
        if not verify_password(password, user.password_hash):
            raise InvalidInputError("Email or password is incorrect")
        return user

    def change_password(
        self,
        *,
        user_id: int,
        current_password: Union[str, SecretStr],
        new_password: Union[str, SecretStr],
        confirm_new_password: Union[str, SecretStr],
    ) -> None:
        if _to_plain(new_password) != _to_plain(confirm_new_password):
            raise InvalidInputError("New password and confirmation do not match")
        if _to_plain(new_password) == _to_plain(current_password):
            raise InvalidInputError("New password must differ from the current password")

        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User does not exist")
        if not verify_password(current_password, user.password_hash):
            raise InvalidInputError("Current password is incorrect")
        self.repo.update_password(user, hash_password(new_password))
