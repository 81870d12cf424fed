
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from docman.auth.deps import get_db, get_requester
from docman.auth.permissions import Requester
from docman.documents.search import build_listing_query, to_statement
from docman.pagination import PageParams, page_params, paginate
from docman.schemas.document import DocumentPage
from docman.schemas.user import UserOut, UserPage, UserUpdate, UserUpdateOut
from docman.users import service

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=UserPage)
def list_users(params: PageParams = Depends(page_params), db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    rows, count, meta = service.list_users(db, params)
    return {"users": {"rows": rows, "count": count}, "meta_data": meta}

@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    return service.get_user_or_404(db, user_id)

@router.put("/{user_id}", response_model=UserUpdateOut)
def update_user(user_id: int, body: UserUpdate, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    user = service.update_user(db, requester, user_id, body)
    return {"message": "User updated successfully.", "updated_user": user}

@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), requester: Requester = Depends(get_requester)):
    service.delete_user(db, requester, user_id)
    return {"message": "User deleted successfully."}

@router.get("/{user_id}/documents", response_model=DocumentPage)
def list_user_documents(
    user_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    requester: Requester = Depends(get_requester),
):
    service.get_user_or_404(db, user_id)
    stmt = to_statement(build_listing_query(requester, owner_id=user_id))
    rows, count, meta = paginate(db, stmt, params)
    return {"documents": {"rows": rows, "count": count}, "meta_data": meta}
