
import logging

from sqlalchemy.orm import Session
from docman.auth.permissions import Requester, can_read_document, ensure_document_write, ensure_owner_or_admin
from docman.documents.search import build_listing_query, build_search_query, to_statement
from docman.errors import Forbidden, NotFound
from docman.models.document import Document
from docman.pagination import PageParams, paginate
from docman.schemas.document import DocumentCreate, DocumentUpdate

logger = logging.getLogger(__name__)

def get_document_or_404(db: Session, doc_id: int) -> Document:
    doc = db.get(Document, doc_id)
    if doc is None:
        raise NotFound("Document Not found.")
    return doc

def create_document(db: Session, requester: Requester, body: DocumentCreate) -> Document:
    doc = Document(owner_id=requester.user_id, title=body.title, content=body.content, access=body.access)
    db.add(doc); db.commit(); db.refresh(doc)
    logger.info("document %s created by %s", doc.id, requester.user_id)
    return doc

def read_document(db: Session, requester: Requester, doc_id: int) -> Document:
    doc = get_document_or_404(db, doc_id)
    if not can_read_document(requester, doc):
        raise Forbidden()
    return doc

def update_document(db: Session, requester: Requester, doc_id: int, body: DocumentUpdate) -> Document:
    doc = get_document_or_404(db, doc_id)
    ensure_document_write(requester, doc, body.model_fields_set)
    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(doc, field, value)
    db.commit(); db.refresh(doc)
    logger.info("document %s updated by %s", doc.id, requester.user_id)
    return doc

def delete_document(db: Session, requester: Requester, doc_id: int) -> None:
    doc = get_document_or_404(db, doc_id)
    ensure_owner_or_admin(requester, doc.owner_id)
    db.delete(doc); db.commit()
    logger.info("document %s deleted by %s", doc_id, requester.user_id)

def list_documents(db: Session, requester: Requester, params: PageParams):
    return paginate(db, to_statement(build_listing_query(requester)), params)

def search_documents(db: Session, requester: Requester, search: str | None, params: PageParams):
    query = build_search_query(search, requester)
    logger.debug("search %r by %s -> %r", search, requester.user_id, query.where)
    return paginate(db, to_statement(query), params)
