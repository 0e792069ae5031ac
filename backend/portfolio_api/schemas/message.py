"""
Portfolio API - Message Schemas
================================

Contact-form submissions. `timestamp` and `read` are assigned by the storage
layer on create; `read` can be toggled afterwards through PUT.
"""

import uuid
from typing import Optional

from pydantic import BaseModel

from portfolio_api.schemas.common import InputSchema, RecordSchema, UtcDateTime


class MessageCreate(InputSchema):
    email: Optional[str] = None
    message: Optional[str] = None


class MessageUpdate(InputSchema):
    email: Optional[str] = None
    message: Optional[str] = None
    read: bool = False


class MessageResponse(RecordSchema):
    id: uuid.UUID
    email: Optional[str] = None
    message: Optional[str] = None
    timestamp: UtcDateTime
    read: bool = False


class MessageReceived(BaseModel):
    message: str = "Message received"
    contact: MessageResponse
