"""
Pydantic schemas and validation gate for contact form messages.
"""
from typing import Literal, Optional, get_args
from pydantic import BaseModel, Field, field_validator

from portfolio.shared.validation import EMAIL_PATTERN, reject_null, run_gate

MessageStatus = Literal["new", "read", "responded", "archived"]

MESSAGE_STATUSES: tuple[str, ...] = get_args(MessageStatus)

REQUIRED_FIELDS = ("name", "email", "message")


class MessageCreate(BaseModel):
    """Fields a visitor may submit. status and created_at are not accepted."""
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    message: str = Field(..., min_length=1)
    service: Optional[str] = None
    budget: Optional[str] = None


class MessageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    message: Optional[str] = Field(None, min_length=1)
    service: Optional[str] = None
    budget: Optional[str] = None

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class StatusUpdate(BaseModel):
    status: MessageStatus


def _describe(field_name: str) -> Optional[str]:
    if field_name == "email":
        return "Invalid email format"
    if field_name == "status":
        return f"Invalid status. Must be one of: {', '.join(MESSAGE_STATUSES)}"
    return None


def validate_contact_message(data: dict) -> dict:
    """Gate for the contact form: name, email and message required, email format checked."""
    return run_gate(MessageCreate, data, REQUIRED_FIELDS, _describe)


def validate_message_update(data: dict) -> dict:
    return run_gate(MessageUpdate, data, describe=_describe, partial=True)


def validate_status(status: str) -> str:
    return run_gate(StatusUpdate, {"status": status}, ("status",), _describe)["status"]
