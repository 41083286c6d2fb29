"""
Admin session endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pymongo.database import Database

from aroma.auth import SessionRepository, login, require_admin
from aroma.database import get_db
from aroma.schemas import IdentityResponse, LoginRequest, SessionResponse

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=SessionResponse)
def admin_login(credentials: LoginRequest, db: Database = Depends(get_db)) -> dict[str, Any]:
    return login(db, credentials)


@router.post("/logout")
def admin_logout(
    session: dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
) -> dict[str, bool]:
    SessionRepository(db).revoke(session["token"])
    return {"success": True}


@router.get("/session", response_model=IdentityResponse)
def current_session(session: dict[str, Any] = Depends(require_admin)) -> dict[str, Any]:
    return {"email": session["email"], "role": session["role"]}
