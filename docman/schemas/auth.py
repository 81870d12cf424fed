
from pydantic import EmailStr, Field, field_validator
from docman.schemas.common import CamelModel, check_password_length
from docman.schemas.user import UserOut

class SignupIn(CamelModel):
    id: int | None = None
    username: str = Field(min_length=1, max_length=120)
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(max_length=256)
    role_id: int | None = None

    validate_password = field_validator("password")(check_password_length)

class LoginIn(CamelModel):
    username: str
    password: str

class AuthOut(CamelModel):
    message: str
    token: str
    user: UserOut
