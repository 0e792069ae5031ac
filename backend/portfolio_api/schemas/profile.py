"""
Portfolio API - Profile Schemas
================================

The profile is a singleton, so its response carries no id. Input fields are
non-null strings: sending null for a profile field is a validation error,
sending nothing leaves it untouched (PUT) or resets it to "" (POST).
"""

from pydantic import BaseModel

from portfolio_api.schemas.common import InputSchema, RecordSchema


class ProfileUpdate(InputSchema):
    full_name: str = ""
    role: str = ""
    about: str = ""
    current_focus: str = ""
    skills: str = ""
    linkedin: str = ""
    github: str = ""
    email: str = ""


class ProfileResponse(RecordSchema):
    full_name: str = ""
    role: str = ""
    about: str = ""
    current_focus: str = ""
    skills: str = ""
    linkedin: str = ""
    github: str = ""
    email: str = ""


class ProfileSaved(BaseModel):
    message: str = "Profile saved"
    profile: ProfileResponse
