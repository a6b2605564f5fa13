"""Pydantic DTOs for the public contact form."""

from pydantic import BaseModel, Field


class ContactRequest(BaseModel):
    email: str = Field("", examples=["visitor@example.com"])
    subject: str = Field("", max_length=200, examples=["Question"])
    message: str = Field("", examples=["Hello!"])


class ContactResponse(BaseModel):
    sent: bool
