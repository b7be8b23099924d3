"""Home page media and static content routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse

from ..api.responses import envelope
from ..auth.auth_dependencies import require_admin_user
from ..slots.slot_kinds import BANNER, HOME_VIDEO
from .content_models import HtmlPage
from .content_schemas import (
    AboutUsUpdateRequest,
    LegalPageUpdateRequest,
    PlanDetailsUpdateRequest,
)
from .content_service import HomeMediaService, PagesService

router = APIRouter(prefix="/api/home", tags=["home"])


def get_home_media_service(request: Request) -> HomeMediaService:
    try:
        return request.app.state.home_media_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("HomeMediaService is not configured") from exc


def get_pages_service(request: Request) -> PagesService:
    try:
        return request.app.state.pages_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("PagesService is not configured") from exc


def _legal_payload(page: HtmlPage) -> dict[str, object]:
    return {"content": page.html_content, "lastUpdated": page.updated_at}


@router.get("/home-video")
def fetch_home_video(
    request: Request,
    service: HomeMediaService = Depends(get_home_media_service),
) -> JSONResponse:
    slot = service.home_video()
    return envelope(
        "Home video fetched successfully",
        service.slot_payload(HOME_VIDEO, slot, str(request.base_url)),
    )


@router.put("/home-video", dependencies=[Depends(require_admin_user)])
async def replace_home_video(
    video: UploadFile | None = File(default=None),
    service: HomeMediaService = Depends(get_home_media_service),
) -> JSONResponse:
    result = await service.replace_home_video(video)
    return envelope("Home video updated successfully", result.to_payload())


@router.delete("/home-video", dependencies=[Depends(require_admin_user)])
def clear_home_video(
    service: HomeMediaService = Depends(get_home_media_service),
) -> JSONResponse:
    result = service.clear_home_video()
    return envelope("Home video removed successfully", result.to_payload())


@router.get("/banners")
def list_banners(
    request: Request,
    service: HomeMediaService = Depends(get_home_media_service),
) -> JSONResponse:
    base_url = str(request.base_url)
    payload = [service.slot_payload(BANNER, slot, base_url) for slot in service.banners()]
    return envelope("Banners fetched successfully", payload)


@router.put("/banners/{banner_id}", dependencies=[Depends(require_admin_user)])
async def replace_banner(
    banner_id: int,
    banner: UploadFile | None = File(default=None),
    service: HomeMediaService = Depends(get_home_media_service),
) -> JSONResponse:
    result = await service.replace_banner(banner_id, banner)
    return envelope(f"Banner {banner_id} updated successfully", result.to_payload())


@router.delete("/banners/{banner_id}", dependencies=[Depends(require_admin_user)])
def clear_banner(
    banner_id: int,
    service: HomeMediaService = Depends(get_home_media_service),
) -> JSONResponse:
    result = service.clear_banner(banner_id)
    return envelope(f"Banner {banner_id} removed successfully", result.to_payload())


@router.get("/about-us")
def fetch_about_us(service: PagesService = Depends(get_pages_service)) -> JSONResponse:
    page = service.about_us()
    return envelope(
        "About Us content fetched successfully",
        {"htmlContent": page.html_content, "updatedAt": page.updated_at},
    )


@router.put("/about-us", dependencies=[Depends(require_admin_user)])
def update_about_us(
    payload: AboutUsUpdateRequest,
    service: PagesService = Depends(get_pages_service),
) -> JSONResponse:
    page = service.update_about_us(payload.html_content)
    return envelope(
        "About Us content updated successfully",
        {"htmlContent": page.html_content, "updatedAt": page.updated_at},
    )


@router.get("/terms-and-conditions")
def fetch_terms(service: PagesService = Depends(get_pages_service)) -> JSONResponse:
    page = service.legal_page("terms")
    return envelope("Terms and conditions fetched successfully", _legal_payload(page))


@router.put("/terms-and-conditions", dependencies=[Depends(require_admin_user)])
def update_terms(
    payload: LegalPageUpdateRequest,
    service: PagesService = Depends(get_pages_service),
) -> JSONResponse:
    page = service.update_legal_page("terms", payload.html_content)
    return envelope("Terms and conditions updated successfully", _legal_payload(page))


@router.get("/privacy-policy")
def fetch_privacy_policy(service: PagesService = Depends(get_pages_service)) -> JSONResponse:
    page = service.legal_page("privacy")
    return envelope("Privacy policy fetched successfully", _legal_payload(page))


@router.put("/privacy-policy", dependencies=[Depends(require_admin_user)])
def update_privacy_policy(
    payload: LegalPageUpdateRequest,
    service: PagesService = Depends(get_pages_service),
) -> JSONResponse:
    page = service.update_legal_page("privacy", payload.html_content)
    return envelope("Privacy policy updated successfully", _legal_payload(page))


@router.get("/plan-details")
def fetch_plan_details(service: PagesService = Depends(get_pages_service)) -> JSONResponse:
    plan = service.plan_details()
    return envelope("Plan details fetched successfully", plan.to_payload())


@router.put("/plan-details", dependencies=[Depends(require_admin_user)])
def update_plan_details(
    payload: PlanDetailsUpdateRequest,
    service: PagesService = Depends(get_pages_service),
) -> JSONResponse:
    plan = service.update_plan_details(payload.model_dump(exclude_unset=True))
    return envelope("Plan details updated successfully", plan.to_payload())
