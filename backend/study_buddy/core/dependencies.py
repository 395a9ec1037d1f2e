"""
FastAPI dependency injection functions.
"""

from enum import Enum

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from study_buddy.config import get_settings
from study_buddy.core.database import get_supabase_client, get_supabase_admin_client
from study_buddy.core.exceptions import ForbiddenError, UnauthorizedError
from study_buddy.core.security import decode_access_token
from study_buddy.core.storage import ObjectStorage

# Bearer token scheme for Swagger UI; missing headers are reported as 401 below
bearer_scheme = HTTPBearer(auto_error=False)


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"


class Identity(BaseModel):
    """The acting user, as currently stored (not as claimed by the token)."""
    user_id: str
    email: str
    name: str
    role: UserRole


def get_db() -> Client:
    """Dependency: get Supabase client."""
    return get_supabase_client()


def get_storage() -> ObjectStorage:
    """Dependency: storage bucket for uploads (service key client)."""
    settings = get_settings()
    return ObjectStorage(get_supabase_admin_client(), settings.STORAGE_BUCKET)


def authorize(db: Client, token: str | None, required_role: UserRole | None = None) -> Identity:
    """Resolve a bearer credential to the current Identity.

    The role is re-read from the users table on every call.

    Raises:
        UnauthorizedError: Missing/invalid token, or the user no longer exists.
        ForbiddenError: The user does not have `required_role`.
    """
    if not token:
        raise UnauthorizedError()

    payload = decode_access_token(token)
    if payload is None or not payload.get("sub"):
        raise UnauthorizedError(detail="Invalid or expired token")

    result = (
        db.table("users")
        .select("id, email, name, role")
        .eq("id", payload["sub"])
        .execute()
    )
    if not result.data:
        raise UnauthorizedError(detail="Account no longer exists")

    user = result.data[0]
    identity = Identity(
        user_id=user["id"], email=user["email"], name=user["name"], role=user["role"]
    )

    if required_role is not None and identity.role != required_role:
        raise ForbiddenError(
            f"Unauthorized. {required_role.value.capitalize()} access required."
        )
    return identity


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Client = Depends(get_db),
) -> Identity:
    """Dependency: any authenticated user."""
    token = credentials.credentials if credentials else None
    return authorize(db, token)


def require_role(role: UserRole):
    """Dependency factory for role-restricted routes."""

    async def role_checker(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        db: Client = Depends(get_db),
    ) -> Identity:
        token = credentials.credentials if credentials else None
        return authorize(db, token, role)

    return role_checker


require_teacher = require_role(UserRole.TEACHER)
require_student = require_role(UserRole.STUDENT)
