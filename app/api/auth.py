from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_db
from app.schemas.auth import LoginIn, LoginOut
from app.crud import user as crud_user

router = APIRouter()


@router.post("/login", response_model=LoginOut)
def login(form: LoginIn, db: Session = Depends(get_db)):
    return crud_user.login_user(db, form.email, form.password)
