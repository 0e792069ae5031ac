"""
Portfolio API - Collection Router Factory
==========================================

What:  Builds the standard five routes for a JSON-bodied collection.
How:   build_collection_router() closes over the collection's service and
       schemas, so /projects and /messages share one handler set and one
       error policy.

Routes produced (for prefix "/projects"):
    GET    /projects          → list of records
    GET    /projects/{id}     → record, 404 when absent
    POST   /projects          → 201 {"message": ..., "<kind>": record}
    PUT    /projects/{id}     → merged record, 404 when absent
    DELETE /projects/{id}     → {"message": "... deleted"}, also when absent
"""

import uuid
from typing import List, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.database import get_db_session
from portfolio_api.schemas.common import DeleteResponse, ErrorResponse, InputSchema, RecordSchema
from portfolio_api.services.collection_service import CollectionService

ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    503: {"description": "Data store unavailable", "model": ErrorResponse},
}
NOT_FOUND_RESPONSES = {
    **ERROR_RESPONSES,
    404: {"description": "Record not found", "model": ErrorResponse},
}


def build_collection_router(
    *,
    prefix: str,
    tag: str,
    service: CollectionService,
    create_schema: Type[InputSchema],
    update_schema: Type[InputSchema],
    response_schema: Type[RecordSchema],
    created_schema: Type[BaseModel],
    created_key: str,
) -> APIRouter:
    """
    Args:
        prefix:          URL prefix, e.g. "/projects"
        tag:             OpenAPI tag
        service:         CollectionService for the collection
        create_schema:   body model for POST
        update_schema:   body model for PUT (all fields optional)
        response_schema: record model
        created_schema:  POST response wrapper; `created_key` names its record field
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    label = service.label

    @router.get(
        "",
        response_model=List[response_schema],
        responses=ERROR_RESPONSES,
        summary=f"List all {label}s",
    )
    async def list_records(db: AsyncSession = Depends(get_db_session)):
        return await service.list_records(db)

    @router.get(
        "/{record_id}",
        response_model=response_schema,
        responses=NOT_FOUND_RESPONSES,
        summary=f"Get a single {label}",
    )
    async def get_record(record_id: uuid.UUID, db: AsyncSession = Depends(get_db_session)):
        return await service.get_record(db, record_id)

    @router.post(
        "",
        status_code=201,
        response_model=created_schema,
        responses=ERROR_RESPONSES,
        summary=f"Create a {label}",
    )
    async def create_record(payload: create_schema, db: AsyncSession = Depends(get_db_session)):
        record = await service.create_record(db, payload.provided_fields())
        return created_schema(**{created_key: response_schema.model_validate(record)})

    @router.put(
        "/{record_id}",
        response_model=response_schema,
        responses=NOT_FOUND_RESPONSES,
        summary=f"Update a {label}",
        description="Only the fields present in the body are changed.",
    )
    async def update_record(
        record_id: uuid.UUID,
        payload: update_schema,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.update_record(db, record_id, payload.provided_fields())

    @router.delete(
        "/{record_id}",
        response_model=DeleteResponse,
        responses=ERROR_RESPONSES,
        summary=f"Delete a {label}",
    )
    async def delete_record(record_id: uuid.UUID, db: AsyncSession = Depends(get_db_session)):
        await service.delete_record(db, record_id)
        return DeleteResponse(message=f"{label.capitalize()} deleted")

    return router
