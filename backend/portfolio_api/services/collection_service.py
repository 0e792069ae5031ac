"""
Portfolio API - Collection Service
===================================

What:  Generic CRUD over one collection (resources, projects, messages).
How:   One CollectionService instance per entity kind, parameterized by the
       ORM model, a human label for messages, and the column that defines
       list order. Every method performs a single storage operation and
       translates SQLAlchemy failures into application exceptions.
Who:   Called by the route handlers; the session comes from get_db_session.

Semantics shared by every collection:
    list    → all records, oldest first
    get     → record by id, NotFoundError when absent
    create  → insert; defaults for omitted columns come from the model
    update  → merge provided fields into the record, NotFoundError when absent
    delete  → remove if present; absent ids are not an error

Every write commits before returning, so a failed commit reaches the caller
(and the HTTP error handlers) instead of surfacing after the response.

Updates are plain read-then-write without locking: two concurrent updates to
the same record are last-writer-wins.
"""

import logging
import uuid
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import Base, translate_db_error
from portfolio_api.exceptions import NotFoundError
from portfolio_api.models.message import Message
from portfolio_api.models.project import Project
from portfolio_api.models.resource import Resource

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CollectionService(Generic[ModelT]):
    """
    CRUD operations for a single collection.

    Args:
        model:     ORM class backing the collection
        label:     singular name used in log lines and NotFound messages
        order_by:  column attribute defining the list order
    """

    def __init__(self, model: Type[ModelT], label: str, order_by: Any):
        self.model = model
        self.label = label
        self.order_by = order_by

    async def list_records(self, db: AsyncSession) -> List[ModelT]:
        try:
            result = await db.execute(
                select(self.model).order_by(self.order_by, self.model.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise translate_db_error(e, operation="list", collection=self.label) from e

    async def _fetch(self, db: AsyncSession, record_id: uuid.UUID) -> Optional[ModelT]:
        try:
            return await db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise translate_db_error(
                e, operation="get", collection=self.label, record_id=str(record_id)
            ) from e

    async def get_record(self, db: AsyncSession, record_id: uuid.UUID) -> ModelT:
        """
        Raises:
            NotFoundError: no record with this id (→ 404)
        """
        record = await self._fetch(db, record_id)
        if record is None:
            raise NotFoundError(resource=self.label, resource_id=str(record_id))
        return record

    async def create_record(self, db: AsyncSession, fields: Dict[str, Any]) -> ModelT:
        record = self.model(**fields)
        try:
            db.add(record)
            # Flush assigns defaults (id, timestamps); commit before the response is built
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            raise translate_db_error(e, operation="create", collection=self.label) from e

        logger.info("Created %s %s", self.label, record.id)
        return record

    async def update_record(
        self,
        db: AsyncSession,
        record_id: uuid.UUID,
        fields: Dict[str, Any],
    ) -> ModelT:
        """
        Merge `fields` into the record. Keys not present are left untouched.

        Raises:
            NotFoundError: no record with this id (→ 404)
        """
        record = await self.get_record(db, record_id)
        for name, value in fields.items():
            setattr(record, name, value)
        try:
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            raise translate_db_error(
                e, operation="update", collection=self.label, record_id=str(record_id)
            ) from e

        logger.info("Updated %s %s (%s)", self.label, record_id, ", ".join(sorted(fields)) or "no fields")
        return record

    async def delete_record(self, db: AsyncSession, record_id: uuid.UUID) -> Optional[ModelT]:
        """
        Delete the record if it exists.

        Returns the deleted record (so callers can release attached files),
        or None when nothing matched. A missing id is not an error.
        """
        record = await self._fetch(db, record_id)
        if record is None:
            logger.debug("Delete %s %s: no such record", self.label, record_id)
            return None
        try:
            await db.delete(record)
            await db.commit()
        except SQLAlchemyError as e:
            raise translate_db_error(
                e, operation="delete", collection=self.label, record_id=str(record_id)
            ) from e

        logger.info("Deleted %s %s", self.label, record_id)
        return record


resource_service: CollectionService[Resource] = CollectionService(
    Resource, label="resource", order_by=Resource.created_at
)
project_service: CollectionService[Project] = CollectionService(
    Project, label="project", order_by=Project.created_at
)
message_service: CollectionService[Message] = CollectionService(
    Message, label="message", order_by=Message.timestamp
)
