"""
Portfolio API - Application Package
====================================

REST backend for a personal portfolio site: resources (with optional file
uploads), projects, a singleton profile, and contact messages.

Layers:
    routes/     HTTP concerns only
    services/   one storage operation per call, error translation
    models/     SQLAlchemy tables, one per collection
    schemas/    Pydantic request/response contracts
    database    async engine and session-per-request dependency
"""

__version__ = "1.0.0"
