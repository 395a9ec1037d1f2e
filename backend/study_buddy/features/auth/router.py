"""
Auth feature: API routes.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, get_current_identity
from study_buddy.features.auth.schemas import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from study_buddy.features.auth.service import AuthService

router = APIRouter()


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db: Client = Depends(get_db)):
    """Create a student or teacher account."""
    return AuthService(db).register(data)


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, db: Client = Depends(get_db)):
    """Log in and receive a JWT."""
    return AuthService(db).login(data)


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """Current user's profile."""
    return AuthService(db).get_profile(identity.user_id)
