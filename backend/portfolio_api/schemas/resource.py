"""
Portfolio API - Resource Schemas
=================================

Request and response contracts for /resources. `fileUrl` is server-managed:
it is set from an uploaded file and cannot be written directly.
"""

import uuid
from typing import Optional

from pydantic import BaseModel

from portfolio_api.schemas.common import InputSchema, RecordSchema, UtcDateTime


class ResourceCreate(InputSchema):
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class ResourceUpdate(InputSchema):
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class ResourceResponse(RecordSchema):
    id: uuid.UUID
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
    created_at: UtcDateTime


class ResourceCreated(BaseModel):
    message: str = "Resource created"
    resource: ResourceResponse
