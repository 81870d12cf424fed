"""Search query construction for documents.

The builder produces a small, storage independent filter tree which is
compiled into a SQLAlchemy clause only at the edge (``compile_filter``).
Keeping the tree explicit lets the visibility rules be inspected and
tested without a database.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.sql.elements import ColumnElement

from docman.auth.permissions import Requester
from docman.models.document import SHARED_ACCESS, Document


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match."""

    field: str
    value: str


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True)
class In:
    field: str
    values: tuple


@dataclass(frozen=True)
class And:
    clauses: tuple[Filter, ...]


@dataclass(frozen=True)
class Or:
    clauses: tuple[Filter, ...]


Filter = Union[Contains, Eq, In, And, Or]


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = True


@dataclass(frozen=True)
class DocumentQuery:
    where: Filter | None
    order_by: tuple[OrderBy, ...] = (OrderBy("created_at"), OrderBy("id"))


def text_filter(search: str) -> Filter:
    term = search.strip()
    return Or((Contains("title", term), Contains("content", term)))


def visibility_filter(requester: Requester) -> Filter | None:
    """None means no restriction (admins see everything)."""
    if requester.is_admin:
        return None
    return Or((Eq("owner_id", requester.user_id), In("access", SHARED_ACCESS)))


def build_search_query(search: str | None, requester: Requester) -> DocumentQuery:
    # an empty search term matches every document the requester may see
    text = text_filter(search or "")
    visibility = visibility_filter(requester)
    if visibility is None:
        return DocumentQuery(where=text)
    return DocumentQuery(where=And((text, visibility)))


def build_listing_query(requester: Requester, owner_id: int | None = None) -> DocumentQuery:
    clauses = []
    if owner_id is not None:
        clauses.append(Eq("owner_id", owner_id))
    visibility = visibility_filter(requester)
    if visibility is not None:
        clauses.append(visibility)
    if not clauses:
        return DocumentQuery(where=None)
    if len(clauses) == 1:
        return DocumentQuery(where=clauses[0])
    return DocumentQuery(where=And(tuple(clauses)))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_filter(node: Filter, model=Document) -> ColumnElement[bool]:
    if isinstance(node, Contains):
        column = getattr(model, node.field)
        return column.ilike(f"%{_escape_like(node.value)}%", escape="\\")
    if isinstance(node, Eq):
        return getattr(model, node.field) == node.value
    if isinstance(node, In):
        return getattr(model, node.field).in_(node.values)
    if isinstance(node, And):
        return and_(*(compile_filter(c, model) for c in node.clauses))
    if isinstance(node, Or):
        return or_(*(compile_filter(c, model) for c in node.clauses))
    raise TypeError(f"unsupported filter node: {node!r}")


def to_statement(query: DocumentQuery, model=Document) -> Select:
    stmt = select(model)
    if query.where is not None:
        stmt = stmt.where(compile_filter(query.where, model))
    for order in query.order_by:
        column = getattr(model, order.field)
        stmt = stmt.order_by(column.desc() if order.descending else column.asc())
    return stmt
