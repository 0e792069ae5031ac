"""
Portfolio API - Project Routes
===============================

Case-study CRUD under /projects. Bodies are JSON; see routes/collection.py
for the shared handler set.

Example:
    POST /projects
    {"title": "Search rewrite", "problem": "...", "decision": "...",
     "tradeoff": "...", "outcome": "..."}
    → 201 {"message": "Project created", "project": {"id": "...", ...}}
"""

from portfolio_api.routes.collection import build_collection_router
from portfolio_api.schemas.project import (
    ProjectCreate,
    ProjectCreated,
    ProjectResponse,
    ProjectUpdate,
)
from portfolio_api.services.collection_service import project_service

router = build_collection_router(
    prefix="/projects",
    tag="Projects",
    service=project_service,
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
    response_schema=ProjectResponse,
    created_schema=ProjectCreated,
    created_key="project",
)
