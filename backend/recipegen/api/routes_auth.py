# recipegen/api/routes_auth.py
# 가입/로그인/내 정보

from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from recipegen.core.deps import get_current_user
from recipegen.core.security import create_access_token, verify_password
from recipegen.db.init import get_db
from recipegen.db.models.user import LoginIn, RegisterIn, TokenOut, UserOut
from recipegen.services.users import UserExists, create_user, find_by_email, to_user_out

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(doc: Dict[str, Any]) -> TokenOut:
    user = to_user_out(doc)
    return TokenOut(token=create_access_token(user.id), user=user)


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(payload: RegisterIn, db=Depends(get_db)):
    try:
        doc = await create_user(db, payload)
    except UserExists:
        raise HTTPException(status_code=400, detail="User already exists")
    return _token_response(doc)


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, db=Depends(get_db)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Please provide an email and password")

    doc = await find_by_email(db, payload.email)
    if not doc or not verify_password(payload.password, doc.get("password", "")):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _token_response(doc)


@router.get("/me")
async def me(user: Dict[str, Any] = Depends(get_current_user)):
    return {"success": True, "data": UserOut(**user)}
