import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.errors import AuthError, envelope
from core.security import CurrentUser, create_access_token, security, verify_token
from schemas.auth import ChangePasswordIn, LoginIn, RegisterIn, UserOut
from services.auth_services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def _request_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(settings.JWT_ACCESS_COOKIE_NAME)


async def get_current_user(request: Request, db: Session = Depends(get_db)) -> CurrentUser:
    result = verify_token(db, _request_token(request))
    if not result.valid or result.user is None:
        raise AuthError(result.error or AuthError.default_message)
    return CurrentUser(id=result.user.id, email=result.user.email)


def _issue_token(response: Response, user_id: int) -> str:
    token = create_access_token(user_id)
    security.set_access_cookies(token, response)
    return token


@router.post("/register")
async def post_reg(response: Response, data: RegisterIn, db: Session = Depends(get_db)):
    svc = AuthService(db)
    user = svc.register(
        email=data.email,
        password=data.password,
        confirm_password=data.confirm_password,
        verification_code=data.verification_code,
    )
    token = _issue_token(response, user.id)
    return envelope(
        message="Registration successful",
        data={"user": UserOut(id=user.id, email=user.email).model_dump(), "token": token},
    )


@router.post("/login")
async def post_login(response: Response, data: LoginIn, db: Session = Depends(get_db)):
    svc = AuthService(db)
    user = svc.login(email=data.email, password=data.password)
    token = _issue_token(response, user.id)
    return envelope(
        message="Login successful",
        data={"user": UserOut(id=user.id, email=user.email).model_dump(), "token": token},
    )


@router.post("/logout")
async def logout(response: Response):
    security.unset_cookies(response)
    return envelope(message="Logout successful")


@router.get("/current")
async def current(user: CurrentUser = Depends(get_current_user)):
    return envelope(data={"user": {"email": user.email}})


@router.post("/changePwd")
async def change_password(
    data: ChangePasswordIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = AuthService(db)
    svc.change_password(
        user_id=user.id,
        current_password=data.current_password,
        new_password=data.new_password,
        confirm_new_password=data.confirm_new_password,
    )
    logger.info("User %s changed password", user.id)
    return envelope(message="Password changed")
