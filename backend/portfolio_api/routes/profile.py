"""
Portfolio API - Profile Routes
===============================

The profile is a singleton, so its routes carry no id:

    GET  /profile   → the profile (created empty on first read, never 404)
    POST /profile   → replace: fields not sent are reset to ""
    PUT  /profile   → merge: fields not sent keep their value; creates if missing
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db_session
from portfolio_api.routes.collection import ERROR_RESPONSES
from portfolio_api.schemas.profile import ProfileResponse, ProfileSaved, ProfileUpdate
from portfolio_api.services.profile_service import profile_service

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get(
    "",
    response_model=ProfileResponse,
    responses=ERROR_RESPONSES,
    summary="Get the profile",
)
async def get_profile(db: AsyncSession = Depends(get_db_session)):
    return await profile_service.get_profile(db)


@router.post(
    "",
    status_code=201,
    response_model=ProfileSaved,
    responses=ERROR_RESPONSES,
    summary="Replace the profile",
)
async def replace_profile(payload: ProfileUpdate, db: AsyncSession = Depends(get_db_session)):
    profile = await profile_service.replace_profile(db, payload.provided_fields())
    return ProfileSaved(profile=ProfileResponse.model_validate(profile))


@router.put(
    "",
    response_model=ProfileResponse,
    responses=ERROR_RESPONSES,
    summary="Update profile fields",
)
async def update_profile(payload: ProfileUpdate, db: AsyncSession = Depends(get_db_session)):
    return await profile_service.update_profile(db, payload.provided_fields())
