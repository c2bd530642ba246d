import re
from typing import Annotated

from pydantic import AfterValidator, EmailStr, SecretStr, constr

from schemas.common import CamelModel

PASSWORD_REGEX = re.compile(
    r"^[A-Za-z0-9!@#$%^&*()_\-+=\[\]{};:'\",.<>/?|`~]+$"
)

def validate_password(v: SecretStr) -> SecretStr:
    password = v.get_secret_value()

    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")

    if " " in password:
        raise ValueError("Password must not contain spaces")

    if not PASSWORD_REGEX.fullmatch(password):
        raise ValueError(
            "Password may contain only English letters, digits and special symbols"
        )

    if not (re.search(r"[A-Z]", password) and re.search(r"[a-z]", password) and re.search(r"\d", password)):
        raise ValueError("Password must contain upper-case and lower-case letters and digits")

    return v


ValidatePassword = Annotated[SecretStr, AfterValidator(validate_password)]


class RegisterIn(CamelModel):

    email : EmailStr
    password: ValidatePassword
    confirm_password: SecretStr
    verification_code: constr(strip_whitespace=True, min_length=1, max_length=32)

class LoginIn(CamelModel):

    email : EmailStr
    password: SecretStr

class ChangePasswordIn(CamelModel):
    current_password: SecretStr
    new_password: ValidatePassword
    confirm_new_password: SecretStr


class UserOut(CamelModel):
    id: int
    email: EmailStr
