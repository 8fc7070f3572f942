# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import ChangePasswordIn, LoginIn, TokenOut, UserCreate, UserRead
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenOut, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.register(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.login(payload.email.lower(), payload.password)
    except PermissionError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get("/profile", response_model=UserRead)
def profile(user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    service = AuthService(db)
    try:
        return service.get_user(user["id"])
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/change-password")
def change_password(
    payload: ChangePasswordIn,
    user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = AuthService(db)
    try:
        service.change_password(user["id"], payload.current_password, payload.new_password)
    except PermissionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Password changed successfully"}
