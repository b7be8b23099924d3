"""Site user routes: registration, login, profile and support tickets."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..api.responses import created, envelope
from ..auth.auth_dependencies import require_user
from ..exceptions import AuthenticationFailedError
from .users_schemas import (
    ProfileUpdateRequest,
    RegisterRequest,
    TicketCreateRequest,
    UserLoginRequest,
)
from .users_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_service(request: Request) -> UserService:
    try:
        return request.app.state.user_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("UserService is not configured") from exc


def _user_id(claims: dict[str, Any]) -> int:
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationFailedError("Invalid token") from None


@router.post("/register")
def register(
    payload: RegisterRequest, service: UserService = Depends(get_user_service)
) -> JSONResponse:
    user = service.register(
        name=payload.name, email=payload.email, password=payload.password, phone=payload.phone
    )
    return created("User registered successfully", user.to_payload())


@router.post("/login")
def login(
    payload: UserLoginRequest, service: UserService = Depends(get_user_service)
) -> JSONResponse:
    token, expires_in, user = service.login(payload.email, payload.password)
    return envelope(
        "Login successful",
        {"token": token, "expiresIn": expires_in, "user": user.to_payload()},
    )


@router.get("/profile")
def fetch_profile(
    claims: dict[str, Any] = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    user = service.profile(_user_id(claims))
    return envelope("Profile fetched successfully", user.to_payload())


@router.put("/profile")
def update_profile(
    payload: ProfileUpdateRequest,
    claims: dict[str, Any] = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    user = service.update_profile(_user_id(claims), payload.model_dump(exclude_unset=True))
    return envelope("Profile updated successfully", user.to_payload())


@router.post("/createTicket")
def create_ticket(
    payload: TicketCreateRequest, service: UserService = Depends(get_user_service)
) -> JSONResponse:
    ticket = service.create_ticket(
        name=payload.name,
        email=payload.email,
        subject=payload.subject,
        message=payload.message,
    )
    return created("Ticket created successfully", ticket.to_payload())
