"""Request bodies for user endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    phone: str | None = None


class UserLoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    name: str | None = None
    phone: str | None = None


class TicketCreateRequest(BaseModel):
    name: str
    email: str
    subject: str
    message: str
