# app/api/users.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.exceptions import NotFound
from app.crud import user as crud_user
from app.schemas.user import UserCreate, UserUpdate, UserOut

router = APIRouter()


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, db: Session = Depends(get_db)):
    return crud_user.create_user(db, user_in)


@router.get("", response_model=List[UserOut])
def read_users(db: Session = Depends(get_db)):
    return crud_user.get_users(db)


@router.get("/type/{user_type}", response_model=List[UserOut])
def read_users_by_type(user_type: str, db: Session = Depends(get_db)):
    return crud_user.get_users_by_type(db, user_type)


@router.get("/{user_id}", response_model=UserOut)
def read_user(user_id: int, db: Session = Depends(get_db)):
    user = crud_user.get_user(db, user_id)
    if user is None:
        raise NotFound("Пользователь не найден")
    return user


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: int, user_in: UserUpdate, db: Session = Depends(get_db)):
    return crud_user.update_user(db, user_id, user_in)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    crud_user.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
