from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.hashing import hash_password, verify_password
from app.utils.auth import create_access_token, get_current_user
from app.schemas.user import UserCreate, UserLogin, UserOut, LoginOut
from app.models.user import User

import logging
logger = logging.getLogger("app.users")


router = APIRouter(prefix="/api/users", tags=["Users"])


def _clean(value):
    return (value or "").strip()


# 註冊
@router.post("/register", response_model=UserOut, status_code=201)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    name = _clean(user_data.name)
    email = _clean(user_data.email).lower()
    password = user_data.password or ""

    if not name or not email or not password:
        raise HTTPException(status_code=400, detail="Name, email, and password are required")

    exists = db.query(User).filter(User.email == email).first()
    if exists:
        raise HTTPException(status_code=409, detail="Email already registered")

    new_user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Registered user id=%s", new_user.id)
    return new_user


# 登入
@router.post("/login", response_model=LoginOut)
def login(body: UserLogin, db: Session = Depends(get_db)):
    email = _clean(body.email).lower()
    if not email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token({"sub": str(user.id), "id": user.id, "email": user.email})
    return LoginOut(
        message="Login successful",
        token=token,
        access_token=token,
        user=UserOut.model_validate(user),
    )


# 全部使用者（不含密碼）
@router.get("", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id).all()


# 取得使用者資料
@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
