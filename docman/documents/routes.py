
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from docman.auth.deps import get_db, get_requester
from docman.auth.permissions import Requester
from docman.documents import service
from docman.pagination import PageParams, page_params
from docman.schemas.document import DocumentCreate, DocumentUpdate, DocumentOut, DocumentPage

router = APIRouter(prefix="/documents", tags=["documents"])
search_router = APIRouter(prefix="/search", tags=["documents"])

@router.post("", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
def create_document(body: DocumentCreate, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    return service.create_document(db, requester, body)

@router.get("", response_model=DocumentPage)
def list_documents(params: PageParams = Depends(page_params), db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    rows, count, meta = service.list_documents(db, requester, params)
    return {"documents": {"rows": rows, "count": count}, "meta_data": meta}

@router.get("/{doc_id}", response_model=DocumentOut)
def get_document(doc_id: int, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    return service.read_document(db, requester, doc_id)

@router.put("/{doc_id}", response_model=DocumentOut)
def update_document(doc_id: int, body: DocumentUpdate, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    return service.update_document(db, requester, doc_id, body)

@router.delete("/{doc_id}")
def delete_document(doc_id: int, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    service.delete_document(db, requester, doc_id)
    return {"message": "Document deleted successfully."}

@search_router.get("/documents", response_model=DocumentPage)
def search_documents(
    search: str = Query(""),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    requester: Requester = Depends(get_requester),
):
    rows, count, meta = service.search_documents(db, requester, search, params)
    return {"documents": {"rows": rows, "count": count}, "meta_data": meta}
