
from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from docman.schemas.common import CamelModel, PageMeta, check_password_length

class UserOut(CamelModel):
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    role_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

class UserUpdate(CamelModel):
    username: str | None = Field(default=None, min_length=1, max_length=120)
    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    email: EmailStr | None = None
    password: str | None = Field(default=None, max_length=256)
    role_id: int | None = None

    validate_password = field_validator("password")(check_password_length)

class UserRows(CamelModel):
    rows: list[UserOut]
    count: int

class UserPage(CamelModel):
    users: UserRows
    meta_data: PageMeta

class UserUpdateOut(CamelModel):
    message: str
    updated_user: UserOut
