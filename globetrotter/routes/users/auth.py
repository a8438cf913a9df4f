from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from globetrotter.core.database import get_db
from globetrotter.core.exceptions import PermissionDenied
from globetrotter.dependencies.auth import get_current_user
from globetrotter.models.user.user import User
from globetrotter.schemas.common import MessageResponse
from globetrotter.schemas.user.user import UserCreate, UserLogin, UserProfile, SignupResponse, LoginResponse
from globetrotter.services.auth import auth as auth_service
from globetrotter.services.auth.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(user: UserCreate, db: AsyncSession = Depends(get_db)):
    new_user = await auth_service.register_user(user, db)
    return {"message": "User registered successfully", "user": new_user}


@router.post("/login", response_model=LoginResponse)
async def login(user_data: UserLogin, db: AsyncSession = Depends(get_db)):
    return await auth_service.login_user(user_data.email, user_data.password, db)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    return auth_service.logout_user()


@router.get("/me/{user_id}", response_model=UserProfile)
async def get_user_by_id(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    if current_user.id != user_id:
        raise PermissionDenied("Cannot view another user's profile")
    return await ProfileService.get_profile(user_id, db)
