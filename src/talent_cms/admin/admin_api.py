"""Admin login and dashboard routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from ..api.responses import envelope
from ..auth.auth_dependencies import get_auth_service, require_admin_user
from ..auth.auth_service import AuthService, InvalidCredentialsError, LoginThrottledError
from .admin_schemas import (
    AdminLoginRequest,
    BlockRequest,
    PlanChangeRequest,
    SuspendRequest,
    UnsuspendRequest,
)
from .admin_service import DashboardService

router = APIRouter(prefix="/api/admin", tags=["admin"])


def get_dashboard_service(request: Request) -> DashboardService:
    try:
        return request.app.state.dashboard_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("DashboardService is not configured") from exc


def _client_ip(request: Request) -> str | None:
    if request.client:
        return request.client.host
    return None


@router.post("/login")
def login(
    payload: AdminLoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    try:
        token, expires_in = service.authenticate(
            username=payload.username,
            password=payload.password,
            client_ip=_client_ip(request),
        )
    except LoginThrottledError as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc)
        ) from exc
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password"
        ) from exc
    return envelope(
        "Login successful",
        {"token": token, "tokenType": "bearer", "expiresIn": expires_in},
    )


@router.get("/profile")
def profile(
    claims: dict[str, Any] = Depends(require_admin_user),
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    try:
        admin = service.profile(claims["sub"])
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found") from exc
    return envelope("Profile fetched successfully", admin)


@router.get("/tickets", dependencies=[Depends(require_admin_user)])
def fetch_tickets(service: DashboardService = Depends(get_dashboard_service)) -> JSONResponse:
    tickets = [ticket.to_payload() for ticket in service.tickets()]
    return envelope("Tickets fetched successfully", tickets)


@router.get("/users", dependencies=[Depends(require_admin_user)])
def fetch_users(service: DashboardService = Depends(get_dashboard_service)) -> JSONResponse:
    users = [user.to_payload() for user in service.users()]
    return envelope("Users fetched successfully", users)


@router.post("/block")
def block_user(
    payload: BlockRequest,
    claims: dict[str, Any] = Depends(require_admin_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> JSONResponse:
    user = service.set_blocked(payload.userId, payload.block, actor=claims.get("sub"))
    action = "blocked" if payload.block else "unblocked"
    return envelope(f"User {action} successfully", user.to_payload())


@router.post("/suspend")
def suspend_user(
    payload: SuspendRequest,
    claims: dict[str, Any] = Depends(require_admin_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> JSONResponse:
    user = service.suspend(
        payload.userId, payload.suspendedFrom, payload.suspendedTo, actor=claims.get("sub")
    )
    return envelope(
        f"User suspended from {user.suspended_from.isoformat()} to {user.suspended_to.isoformat()}",
        user.to_payload(),
    )


@router.post("/unsuspend")
def unsuspend_user(
    payload: UnsuspendRequest,
    claims: dict[str, Any] = Depends(require_admin_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> JSONResponse:
    user = service.unsuspend(payload.userId, actor=claims.get("sub"))
    return envelope("User unsuspended successfully", user.to_payload())


@router.post("/planChange")
def change_plan(
    payload: PlanChangeRequest,
    claims: dict[str, Any] = Depends(require_admin_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> JSONResponse:
    user = service.change_plan(payload.userId, payload.newPlan, actor=claims.get("sub"))
    return envelope("Plan updated successfully", user.to_payload())
