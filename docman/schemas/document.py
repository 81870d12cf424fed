
from datetime import datetime
from pydantic import Field
from docman.models.document import Access
from docman.schemas.common import CamelModel, PageMeta

class DocumentCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    access: Access = Access.public

class DocumentUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    access: Access | None = None
    # accepted only so an attempt to change it can be refused
    owner_id: int | None = None

class DocumentOut(CamelModel):
    id: int
    title: str
    content: str
    access: Access
    owner_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

class DocumentRows(CamelModel):
    rows: list[DocumentOut]
    count: int

class DocumentPage(CamelModel):
    documents: DocumentRows
    meta_data: PageMeta
