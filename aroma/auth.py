"""
Admin Authentication

A single admin account configured through ADMIN_EMAIL / ADMIN_PASSWORD.
A successful login stores a random bearer token in `admin_sessions`;
expired sessions are removed by the TTL index on `expiresAt`, and are
also rejected here in case the TTL monitor has not run yet.
"""

import logging
import secrets
from datetime import timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from aroma.core.config import Settings, get_settings
from aroma.core.errors import AuthenticationError
from aroma.database import ADMIN_SESSIONS, get_db
from aroma.repositories.base import BaseRepository, serialize, utcnow
from aroma.schemas import LoginRequest

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

security = HTTPBearer(auto_error=False)


class SessionRepository(BaseRepository):
    collection_name = ADMIN_SESSIONS

    def create(self, email: str, ttl_hours: int) -> dict[str, Any]:
        now = utcnow()
        doc = {
            "token": secrets.token_urlsafe(32),
            "email": email,
            "role": ADMIN_ROLE,
            "createdAt": now,
            "expiresAt": now + timedelta(hours=ttl_hours),
        }
        self.collection.insert_one(doc)
        return serialize(doc)

    def find_valid(self, token: str) -> Optional[dict[str, Any]]:
        doc = self.collection.find_one({"token": token})
        if not doc:
            return None
        expires_at = doc["expiresAt"]
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= utcnow():
            self.collection.delete_one({"_id": doc["_id"]})
            return None
        return serialize(doc)

    def revoke(self, token: str) -> bool:
        return self.collection.delete_one({"token": token}).deleted_count > 0


def verify_credentials(email: str, password: str, settings: Settings) -> bool:
    # Both comparisons always run
    email_ok = secrets.compare_digest(
        email.lower().encode("utf-8"), settings.admin_email.lower().encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.admin_password.encode("utf-8")
    )
    return email_ok and password_ok


def login(db: Database, credentials: LoginRequest) -> dict[str, Any]:
    settings = get_settings()
    if not verify_credentials(credentials.email, credentials.password, settings):
        logger.warning(f"Failed admin login for {credentials.email}")
        raise AuthenticationError("Invalid email or password")

    session = SessionRepository(db).create(settings.admin_email, settings.session_ttl_hours)
    logger.info(f"Admin login: {settings.admin_email}")
    return session


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    """
    Dependency guarding admin endpoints.

    Returns the session document; raises AuthenticationError (401) when
    the bearer token is missing, unknown or expired.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    session = SessionRepository(db).find_valid(credentials.credentials)
    if session is None or session.get("role") != ADMIN_ROLE:
        raise AuthenticationError("Session expired or invalid")
    return session
