"""
User profile schemas.
"""

from typing import Optional

from pydantic import Field

from weatherdash.schemas.base import TimestampSchema, BaseSchema

PROFILE_FIELDS = (
    "username",
    "email",
    "first_name",
    "last_name",
    "phone",
    "location",
    "bio",
    "job_title",
    "company",
    "profile_picture",
)


class UserProfile(TimestampSchema):
    """User record as returned to its owner. Never carries the password."""
    id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    profile_picture: Optional[str] = None


class ProfileUpdate(BaseSchema):
    """
    Partial profile update.

    Omitted, null and empty values all leave the stored value unchanged.
    Length limits match the column sizes on the users table.
    """
    username: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = None
    job_title: Optional[str] = Field(None, max_length=100)
    company: Optional[str] = Field(None, max_length=200)
    profile_picture: Optional[str] = None
