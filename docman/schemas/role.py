
from pydantic import Field, field_validator
from docman.schemas.common import CamelModel

class RoleCreate(CamelModel):
    title: str = Field(max_length=50)

    @field_validator("title")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title cannot be empty.")
        return value

class RoleOut(CamelModel):
    id: int
    title: str
