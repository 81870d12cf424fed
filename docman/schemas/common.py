
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PageMeta(CamelModel):
    total_count: int
    page_size: int
    total_pages: int
    current_page: int


MIN_PASSWORD_LENGTH = 6

def check_password_length(value: str | None) -> str | None:
    if value is not None and len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    return value
