"""
Request/response models for the site API that are not records themselves.
"""
from pydantic import BaseModel


class FeaturedUpdate(BaseModel):
    featured: bool


class ImageUploadResponse(BaseModel):
    """Uploaded image encoded as a data URL, usable as thumbnail or photo_url."""
    url: str
    filename: str
    size: int
