# =============================================================================
# core/models/profile.py - Profile Schemas
# =============================================================================
# These models define the API contract for profile operations:
# - ProfileInput: The create-or-update form (POST /api/profile)
# - ExperienceCreate: One job entry (PUT /api/profile/experience)
# - EducationCreate: One school entry (PUT /api/profile/education)
#
# Only "status" and "skills" are required on the profile form; every other
# field is optional and left untouched on update when omitted.
# =============================================================================

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lib.utils import date_to_datetime


class ProfileInput(BaseModel):
    """
    Schema for creating or updating the current user's profile.

    `skills` is a comma-separated string; it is split into a list when the
    profile is written.

    Example:
        {
            "status": "Developer",
            "skills": "Python, FastAPI, MongoDB",
            "company": "Acme",
            "githubusername": "janedoe",
            "twitter": "https://twitter.com/janedoe"
        }
    """

    status: str = Field(
        ...,
        min_length=1,
        description="Professional status, e.g. 'Senior Developer'"
    )

    skills: str = Field(
        ...,
        min_length=1,
        description="Comma-separated list of skills"
    )

    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = Field(
        default=None,
        description="GitHub username used to list repositories on the profile"
    )

    # Social links, stored under profile.social
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class _DatedEntry(BaseModel):
    """Shared from/to/current fields of experience and education entries."""

    model_config = ConfigDict(populate_by_name=True)

    from_: date = Field(
        ...,
        alias="from",
        description="Start date"
    )

    to: date | None = Field(
        default=None,
        description="End date, omitted while current"
    )

    current: bool = Field(
        default=False,
        description="Whether this entry is ongoing"
    )

    description: str | None = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.to is not None and self.to < self.from_:
            raise ValueError("to date must not be before from date")
        return self

    def to_document(self) -> dict[str, Any]:
        """
        Convert to the stored subdocument.

        Uses the public field names ("from") and stores dates as datetimes.
        """
        data = self.model_dump(by_alias=True, exclude_none=True)
        data["from"] = date_to_datetime(data["from"])
        if "to" in data:
            data["to"] = date_to_datetime(data["to"])
        return data


class ExperienceCreate(_DatedEntry):
    """
    Schema for adding an experience entry.

    Example:
        {
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Berlin",
            "from": "2021-03-01",
            "current": true
        }
    """

    title: str = Field(..., min_length=1, description="Job title")
    company: str = Field(..., min_length=1, description="Employer")
    location: str | None = None


class EducationCreate(_DatedEntry):
    """
    Schema for adding an education entry.

    Example:
        {
            "school": "TU Berlin",
            "degree": "BSc",
            "fieldofstudy": "Computer Science",
            "from": "2015-10-01",
            "to": "2019-07-31"
        }
    """

    school: str = Field(..., min_length=1, description="School or university")
    degree: str = Field(..., min_length=1, description="Degree or certificate")
    fieldofstudy: str = Field(..., min_length=1, description="Field of study")
