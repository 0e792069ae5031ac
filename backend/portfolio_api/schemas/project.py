"""
Portfolio API - Project Schemas
================================

A project is a short case study; every field is free text.
"""

import uuid
from typing import Optional

from pydantic import BaseModel

from portfolio_api.schemas.common import InputSchema, RecordSchema, UtcDateTime


class ProjectCreate(InputSchema):
    title: Optional[str] = None
    problem: Optional[str] = None
    decision: Optional[str] = None
    tradeoff: Optional[str] = None
    outcome: Optional[str] = None


class ProjectUpdate(ProjectCreate):
    pass


class ProjectResponse(RecordSchema):
    id: uuid.UUID
    title: Optional[str] = None
    problem: Optional[str] = None
    decision: Optional[str] = None
    tradeoff: Optional[str] = None
    outcome: Optional[str] = None
    created_at: UtcDateTime


class ProjectCreated(BaseModel):
    message: str = "Project created"
    project: ProjectResponse
