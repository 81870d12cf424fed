import math
from dataclasses import dataclass

from fastapi import Query
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from docman.config import settings

MAX_PAGE_LIMIT = 100


@dataclass(frozen=True)
class PageParams:
    limit: int
    offset: int


def page_params(
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
) -> PageParams:
    return PageParams(limit=limit or settings.default_page_limit, offset=offset)


def page_meta(total: int, returned: int, params: PageParams) -> dict:
    """Metadata for one page: limit=2, offset=3 over 10 rows is page 2 of 5."""
    return {
        "total_count": total,
        "page_size": returned,
        "total_pages": math.ceil(total / params.limit) if total else 0,
        "current_page": params.offset // params.limit + 1,
    }


def paginate(db: Session, stmt: Select, params: PageParams) -> tuple[list, int, dict]:
    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery()))
    rows = list(db.scalars(stmt.limit(params.limit).offset(params.offset)).all())
    return rows, total, page_meta(total, len(rows), params)
