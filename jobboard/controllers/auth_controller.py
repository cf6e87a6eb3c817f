from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from jobboard.services.auth.AuthInterface import IAuthService
from jobboard.services.auth.auth_service import AuthService, get_current_user
from jobboard.services.auth.identity import Identity
from jobboard.models.user import UserRole
from jobboard.schemas.profile_schema import AlumniProfileUpdate, StudentProfileUpdate
import jobboard.schemas.user_schema as user_schema
from jobboard.db.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()
auth_service: IAuthService = AuthService()

PROFILE_SCHEMAS = {
    UserRole.student: StudentProfileUpdate,
    UserRole.alumni: AlumniProfileUpdate,
}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: user_schema.UserRegister, db: AsyncSession = Depends(get_db)):
    return await auth_service.signup(data.model_dump(), db)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(data: user_schema.UserRegister, db: AsyncSession = Depends(get_db)):
    """Alias of /register"""
    return await auth_service.signup(data.model_dump(), db)


@router.post("/login")
async def login(data: user_schema.UserLogin, db: AsyncSession = Depends(get_db)):
    return await auth_service.login(data.email, data.password, db)


@router.post("/logout")
async def logout(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await auth_service.logout(current_user, db)


@router.get("/profile")
async def get_user_profile(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    """Account plus the role-specific profile, if one exists yet"""
    return await auth_service.get_profile(current_user, db)


@router.put("/profile")
async def update_user_profile(
    body: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    """Validated against the student or alumni profile schema, whichever matches the caller's role"""
    schema = PROFILE_SCHEMAS.get(current_user.role)
    data = body
    if schema is not None:
        try:
            data = schema.model_validate(body).model_dump(exclude_none=True)
        except PydanticValidationError as exc:
            raise RequestValidationError(exc.errors())
    return await auth_service.update_profile(current_user, data, db)


@router.post("/forgot-password")
async def forgot_password(data: user_schema.ForgotPasswordRequest, db: AsyncSession = Depends(get_db)):
    return await auth_service.forgot_password(data.email, db)


@router.post("/reset-password")
async def reset_password(data: user_schema.ResetPasswordRequest, db: AsyncSession = Depends(get_db)):
    return await auth_service.reset_password(data.uid, data.token, data.new_password, db)


@router.post("/change-password")
async def change_password(
    data: user_schema.ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await auth_service.change_password(current_user, data.current_password, data.new_password, db)
