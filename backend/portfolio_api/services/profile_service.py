"""
Portfolio API - Profile Service (singleton record)
===================================================

What:  Read, replace and merge the single profile record.
How:   The profile lives under a fixed primary key (PROFILE_KEY). Every write
       is one INSERT ... ON CONFLICT (id) statement against that key, so the
       table holds at most one row no matter how requests interleave.
       Each operation commits before returning, including the lazy create
       performed by get_profile.

Operations:
    get_profile      → returns the profile, creating an empty one first if needed
    replace_profile  → POST semantics: fields not provided are reset to ""
    update_profile   → PUT semantics: provided fields are merged, others kept;
                       creates the record if it does not exist yet
"""

import logging
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import translate_db_error
from portfolio_api.exceptions import DatabaseError
from portfolio_api.models.profile import PROFILE_FIELDS, PROFILE_KEY, Profile

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ProfileService:
    """Singleton access to the profile table."""

    def _insert(self, db: AsyncSession):
        dialect = db.get_bind().dialect.name
        try:
            insert = _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise DatabaseError(
                message="Profile storage is not supported on this database.",
                context={"dialect": dialect},
            )
        return insert(Profile)

    async def _load(self, db: AsyncSession) -> Profile:
        result = await db.execute(
            select(Profile)
            .where(Profile.id == PROFILE_KEY)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def _upsert(self, db: AsyncSession, values: Dict[str, Any], operation: str) -> Profile:
        stmt = self._insert(db).values(id=PROFILE_KEY, **values)
        if values:
            stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=values)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=["id"])
        try:
            await db.execute(stmt)
            profile = await self._load(db)
            await db.commit()
            return profile
        except SQLAlchemyError as e:
            raise translate_db_error(e, operation=operation, collection="profile") from e

    async def get_profile(self, db: AsyncSession) -> Profile:
        """Return the profile; a missing profile is created empty, never 404."""
        return await self._upsert(db, {}, operation="get")

    async def replace_profile(self, db: AsyncSession, fields: Dict[str, Any]) -> Profile:
        values = {name: fields.get(name, "") for name in PROFILE_FIELDS}
        profile = await self._upsert(db, values, operation="replace")
        logger.info("Profile replaced")
        return profile

    async def update_profile(self, db: AsyncSession, fields: Dict[str, Any]) -> Profile:
        values = {name: fields[name] for name in PROFILE_FIELDS if name in fields}
        profile = await self._upsert(db, values, operation="update")
        logger.info("Profile updated (%s)", ", ".join(sorted(values)) or "no fields")
        return profile


profile_service = ProfileService()
