"""
Portfolio API - Contact Message Routes
=======================================

POST /messages is the contact-form submission path. The record's timestamp
and read flag are filled in by the storage layer; the site owner marks a
message as read with PUT /messages/{id} {"read": true}.

The POST wrapper uses the key "contact" for the record, since "message"
already carries the status text.
"""

from portfolio_api.routes.collection import build_collection_router
from portfolio_api.schemas.message import (
    MessageCreate,
    MessageReceived,
    MessageResponse,
    MessageUpdate,
)
from portfolio_api.services.collection_service import message_service

router = build_collection_router(
    prefix="/messages",
    tag="Messages",
    service=message_service,
    create_schema=MessageCreate,
    update_schema=MessageUpdate,
    response_schema=MessageResponse,
    created_schema=MessageReceived,
    created_key="contact",
)
