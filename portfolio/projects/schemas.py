"""
Pydantic schemas and validation gate for portfolio projects.
"""
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator

from portfolio.projects.constants import CATEGORIES, Category
from portfolio.shared.validation import reject_null, run_gate

REQUIRED_FIELDS = ("title", "category")


def parse_tags(value: Union[str, list, None]) -> list[str]:
    """Turn "a, b,,c" or a list into trimmed, non-empty tags."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


class ProjectBase(BaseModel):
    """Base schema with common project fields."""
    title: str = Field(..., min_length=1, max_length=200)
    category: Category
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    external_links: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    featured: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return parse_tags(value)


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""
    pass


class ProjectUpdate(BaseModel):
    """Schema for updating a project. All fields optional."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[Category] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    external_links: Optional[str] = None
    tags: Optional[list[str]] = None
    featured: Optional[bool] = None

    @field_validator("title", "category", "featured", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return parse_tags(reject_null(value))


def _describe(field_name: str) -> Optional[str]:
    if field_name == "category":
        return f"Invalid category. Must be one of: {', '.join(CATEGORIES)}"
    if field_name == "title":
        return "Title must not be empty"
    return None


def validate_project(data: dict) -> dict:
    """Gate for new projects: title and category required, category from the fixed set."""
    return run_gate(ProjectCreate, data, REQUIRED_FIELDS, _describe)


def validate_project_update(data: dict) -> dict:
    """Gate for partial updates: only the fields supplied are checked and returned."""
    return run_gate(ProjectUpdate, data, describe=_describe, partial=True)
