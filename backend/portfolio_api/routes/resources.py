"""
Portfolio API - Resource Routes
================================

What:  CRUD under /resources with an optional file attached to each record.
How:   POST and PUT accept either multipart/form-data (text fields plus an
       optional `file` part) or a JSON body without a file. Stored files are
       served back from /uploads/<name>.
Who:   Called by the portfolio admin page (upload form) and the public
       resources list.

File lifecycle:
    create: new file stored → fileUrl set; if the insert fails the file is removed
    update: new file stored → fileUrl replaced → old file removed after the response;
            if the record does not exist the new file is removed
    delete: record removed → its file removed after the response
"""

import json
import logging
import uuid
from typing import Any, List, Optional, Tuple, Type

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from portfolio_api.database import get_db_session
from portfolio_api.exceptions import ValidationError
from portfolio_api.routes.collection import ERROR_RESPONSES, NOT_FOUND_RESPONSES
from portfolio_api.schemas.common import DeleteResponse, InputSchema
from portfolio_api.schemas.resource import (
    ResourceCreate,
    ResourceCreated,
    ResourceResponse,
    ResourceUpdate,
)
from portfolio_api.services.collection_service import resource_service
from portfolio_api.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["Resources"])

FILE_FIELD = "file"

# OpenAPI description of the accepted bodies (the handlers parse them by hand)
_UPLOAD_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string"},
                        "category": {"type": "string"},
                        "description": {"type": "string"},
                        FILE_FIELD: {"type": "string", "format": "binary"},
                    },
                }
            },
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string"},
                        "category": {"type": "string"},
                        "description": {"type": "string"},
                    },
                }
            },
        }
    }
}


def _validation_error(exc: PydanticValidationError) -> ValidationError:
    errors = [
        {"field": ".".join(str(p) for p in err["loc"]) or "body", "message": err["msg"]}
        for err in exc.errors()
    ]
    return ValidationError(message="Request contains invalid fields", context={"errors": errors})


async def read_resource_payload(
    request: Request,
    schema: Type[InputSchema],
) -> Tuple[InputSchema, Optional[UploadFile]]:
    """
    Parse a resource body into `schema` plus the optional uploaded file.

    Multipart text parts become fields; the `file` part (if it carries a
    filename) is returned separately. Repeated text fields are rejected.
    """
    content_type = request.headers.get("content-type", "")
    upload: Optional[UploadFile] = None
    fields: dict = {}

    if content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    ):
        form = await request.form()
        for key, value in form.multi_items():
            if key == FILE_FIELD:
                if isinstance(value, UploadFile):
                    if value.filename:
                        upload = value
                    continue
                # A plain text "file" part is not an upload
                raise ValidationError(message="'file' must be a file upload", field=FILE_FIELD)
            if isinstance(value, UploadFile):
                raise ValidationError(message=f"Unexpected file in field '{key}'", field=key)
            if key in fields:
                raise ValidationError(message=f"Field '{key}' was sent more than once", field=key)
            fields[key] = value
    else:
        raw = await request.body()
        if raw.strip():
            try:
                body: Any = json.loads(raw)
            except ValueError:
                raise ValidationError(message="Request body is not valid JSON")
            if not isinstance(body, dict):
                raise ValidationError(message="Request body must be a JSON object")
            fields = body

    try:
        payload = schema.model_validate(fields)
    except PydanticValidationError as e:
        raise _validation_error(e)
    return payload, upload


async def _store_upload(upload: UploadFile) -> Tuple[str, str]:
    try:
        # Multipart parsing records the part size; reject before buffering it
        if upload.size is not None:
            file_service.validate_size(upload.size)
        content = await upload.read()
    finally:
        await upload.close()
    logger.info("Received upload: filename=%s, size=%d bytes", upload.filename, len(content))
    return await file_service.validate_and_store(filename=upload.filename or "", content=content)


@router.get(
    "",
    response_model=List[ResourceResponse],
    responses=ERROR_RESPONSES,
    summary="List all resources",
)
async def list_resources(db: AsyncSession = Depends(get_db_session)):
    return await resource_service.list_records(db)


@router.get(
    "/{resource_id}",
    response_model=ResourceResponse,
    responses=NOT_FOUND_RESPONSES,
    summary="Get a single resource",
)
async def get_resource(resource_id: uuid.UUID, db: AsyncSession = Depends(get_db_session)):
    return await resource_service.get_record(db, resource_id)


@router.post(
    "",
    status_code=201,
    response_model=ResourceCreated,
    responses=ERROR_RESPONSES,
    summary="Create a resource, optionally with an attached file",
    openapi_extra=_UPLOAD_BODY,
)
async def create_resource(request: Request, db: AsyncSession = Depends(get_db_session)):
    payload, upload = await read_resource_payload(request, ResourceCreate)
    fields = payload.provided_fields()

    absolute_path: Optional[str] = None
    if upload is not None:
        absolute_path, fields["file_url"] = await _store_upload(upload)

    try:
        record = await resource_service.create_record(db, fields)
    except Exception:
        if absolute_path:
            await file_service.cleanup_file(absolute_path)
        raise

    return ResourceCreated(resource=ResourceResponse.model_validate(record))


@router.put(
    "/{resource_id}",
    response_model=ResourceResponse,
    responses=NOT_FOUND_RESPONSES,
    summary="Update a resource; a new file replaces the old one",
    description="Only the fields present in the body are changed.",
    openapi_extra=_UPLOAD_BODY,
)
async def update_resource(
    resource_id: uuid.UUID,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db_session),
):
    payload, upload = await read_resource_payload(request, ResourceUpdate)
    fields = payload.provided_fields()

    # Check existence first so a missing id never leaves a stored file behind
    record = await resource_service.get_record(db, resource_id)
    previous_url = record.file_url

    absolute_path: Optional[str] = None
    if upload is not None:
        absolute_path, fields["file_url"] = await _store_upload(upload)

    try:
        record = await resource_service.update_record(db, resource_id, fields)
    except Exception:
        if absolute_path:
            await file_service.cleanup_file(absolute_path)
        raise

    # update_record has committed; the previous file is no longer referenced
    if upload is not None and previous_url and previous_url != record.file_url:
        background_tasks.add_task(file_service.remove_upload, previous_url)

    return record


@router.delete(
    "/{resource_id}",
    response_model=DeleteResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a resource and its file",
)
async def delete_resource(
    resource_id: uuid.UUID,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db_session),
):
    deleted = await resource_service.delete_record(db, resource_id)
    if deleted is not None and deleted.file_url:
        background_tasks.add_task(file_service.remove_upload, deleted.file_url)
    return DeleteResponse(message="Resource deleted")
