
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from docman.auth.deps import get_db, get_current_user
from docman.models.user import User
from docman.schemas.auth import SignupIn, LoginIn, AuthOut
from docman.auth.service import register_user, login_user, logout_user

router = APIRouter(tags=["auth"])

@router.post("/users", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def signup(body: SignupIn, db: Session = Depends(get_db)):
    user, token = register_user(db, body)
    return {"message": "You have successfully signed up!", "token": token, "user": user}

@router.post("/login", response_model=AuthOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    user, token = login_user(db, body.username, body.password)
    return {"message": "You have successfully signed in!", "token": token, "user": user}

@router.post("/logout")
def logout(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    logout_user(db, user)
    return {"message": "You have successfully logged out"}
