"""
Auth feature: Business logic for user registration, login, and profile.
"""

import logging
from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import InvalidInputError, NotFoundError, UnauthorizedError
from study_buddy.core.security import hash_password, verify_password, create_access_token
from study_buddy.features.auth.schemas import RegisterRequest, LoginRequest, UserResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Handles user authentication and profile lookup."""

    def __init__(self, db: Client):
        self.db = db

    def register(self, data: RegisterRequest) -> dict:
        """Register a new user.

        Returns:
            dict with access_token and user data.

        Raises:
            InvalidInputError: If email already exists.
        """
        existing = (
            self.db.table("users")
            .select("id")
            .eq("email", data.email)
            .execute()
        )
        if existing.data:
            raise InvalidInputError("User with this email already exists")

        timestamp = now_iso()
        result = self.db.table("users").insert({
            "email": data.email,
            "password_hash": hash_password(data.password),
            "name": data.name.strip(),
            "role": data.role.value,
            "created_at": timestamp,
            "updated_at": timestamp,
        }).execute()
        user = result.data[0]
        logger.info(f"Registered {user['role']} {user['id']}")

        return self._session(user, "User created successfully")

    def login(self, data: LoginRequest) -> dict:
        """Authenticate user and return JWT token.

        Raises:
            UnauthorizedError: If credentials are invalid.
        """
        result = (
            self.db.table("users")
            .select("*")
            .eq("email", data.email)
            .execute()
        )
        if not result.data:
            raise UnauthorizedError("Invalid credentials")

        user = result.data[0]
        if not verify_password(data.password, user["password_hash"]):
            raise UnauthorizedError("Invalid credentials")

        return self._session(user, "Login successful")

    def get_profile(self, user_id: str) -> UserResponse:
        """Get user profile by ID."""
        result = (
            self.db.table("users")
            .select("id, email, name, role, created_at")
            .eq("id", user_id)
            .execute()
        )
        if not result.data:
            raise NotFoundError("User not found")
        return UserResponse(**result.data[0])

    def _session(self, user: dict, message: str) -> dict:
        token = create_access_token(user["id"], user["email"], user["role"])
        return {
            "message": message,
            "access_token": token,
            "token_type": "bearer",
            "user": UserResponse(**user),
        }
