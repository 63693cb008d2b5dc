"""
Pydantic schema and validation gate for the site owner's profile.
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from portfolio.shared.validation import EMAIL_PATTERN, run_gate

REQUIRED_FIELDS = ("name", "tagline")


class ProfileData(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    tagline: str = Field(..., min_length=1, max_length=300)
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    phone: Optional[str] = None
    location: Optional[str] = None
    youtube_url: Optional[str] = None
    instagram_url: Optional[str] = None
    behance_url: Optional[str] = None
    linkedin_url: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_absent(cls, value):
        # The admin form submits "" for an empty email field
        return value or None


def _describe(field_name: str) -> Optional[str]:
    if field_name == "email":
        return "Invalid email format"
    return None


def validate_profile(data: dict) -> dict:
    """Gate for profile writes: name and tagline required, email format if given."""
    return run_gate(ProfileData, data, REQUIRED_FIELDS, _describe)
