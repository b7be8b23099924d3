"""Category, featured talent and testimonial routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from ..api.responses import created, envelope
from ..auth.auth_dependencies import require_admin_user
from .promo_service import PromoService

router = APIRouter(prefix="/api/home", tags=["promo"])
admin_only = [Depends(require_admin_user)]


def _service(request: Request, name: str) -> PromoService:
    try:
        return request.app.state.promo_services[name]  # type: ignore[attr-defined]
    except (AttributeError, KeyError) as exc:  # pragma: no cover - defensive path
        raise RuntimeError(f"PromoService '{name}' is not configured") from exc


def get_category_service(request: Request) -> PromoService:
    return _service(request, "category")


def get_talent_service(request: Request) -> PromoService:
    return _service(request, "featuredTalent")


def get_testimonial_service(request: Request) -> PromoService:
    return _service(request, "testimonial")


# Categories


@router.post("/categories", dependencies=admin_only)
async def add_category(
    request: Request,
    title: str | None = Form(default=None),
    talent_count: str | None = Form(default=None),
    description: str | None = Form(default=None),
    gender: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
    service: PromoService = Depends(get_category_service),
) -> JSONResponse:
    row = await service.create(
        {"title": title, "talent_count": talent_count, "description": description, "gender": gender},
        {"avatar": avatar},
    )
    return created("Category added successfully", service.to_payload(row, str(request.base_url)))


@router.get("/categories")
def list_categories(
    request: Request, service: PromoService = Depends(get_category_service)
) -> JSONResponse:
    return envelope(
        "Categories fetched successfully", service.list_entities(str(request.base_url))
    )


@router.put("/categories/{category_id}", dependencies=admin_only)
async def update_category(
    category_id: int,
    request: Request,
    title: str | None = Form(default=None),
    talent_count: str | None = Form(default=None),
    description: str | None = Form(default=None),
    gender: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
    service: PromoService = Depends(get_category_service),
) -> JSONResponse:
    row = await service.update(
        category_id,
        {"title": title, "talent_count": talent_count, "description": description, "gender": gender},
        {"avatar": avatar},
    )
    return envelope("Category updated successfully", service.to_payload(row, str(request.base_url)))


@router.delete("/categories/{category_id}", dependencies=admin_only)
def delete_category(
    category_id: int, service: PromoService = Depends(get_category_service)
) -> JSONResponse:
    service.delete(category_id)
    return envelope("Category and image deleted successfully")


# Featured talents


@router.post("/featured-talents", dependencies=admin_only)
async def add_featured_talent(
    request: Request,
    name: str | None = Form(default=None),
    gender: str | None = Form(default=None),
    age: str | None = Form(default=None),
    location: str | None = Form(default=None),
    height: str | None = Form(default=None),
    hair_color: str | None = Form(default=None),
    shoe_size: str | None = Form(default=None),
    eye_color: str | None = Form(default=None),
    profile_img: UploadFile | None = File(default=None),
    image1: UploadFile | None = File(default=None),
    image2: UploadFile | None = File(default=None),
    image3: UploadFile | None = File(default=None),
    service: PromoService = Depends(get_talent_service),
) -> JSONResponse:
    row = await service.create(
        {
            "name": name,
            "gender": gender,
            "age": age,
            "location": location,
            "height": height,
            "hair_color": hair_color,
            "shoe_size": shoe_size,
            "eye_color": eye_color,
        },
        {"profile_img": profile_img, "image1": image1, "image2": image2, "image3": image3},
    )
    return created(
        "Featured talent added successfully", service.to_payload(row, str(request.base_url))
    )


@router.get("/featured-talents")
def list_featured_talents(
    request: Request, service: PromoService = Depends(get_talent_service)
) -> JSONResponse:
    return envelope(
        "Featured talents fetched successfully", service.list_entities(str(request.base_url))
    )


@router.put("/featured-talents/{talent_id}", dependencies=admin_only)
async def update_featured_talent(
    talent_id: int,
    request: Request,
    name: str | None = Form(default=None),
    gender: str | None = Form(default=None),
    age: str | None = Form(default=None),
    location: str | None = Form(default=None),
    height: str | None = Form(default=None),
    hair_color: str | None = Form(default=None),
    shoe_size: str | None = Form(default=None),
    eye_color: str | None = Form(default=None),
    profile_img: UploadFile | None = File(default=None),
    image1: UploadFile | None = File(default=None),
    image2: UploadFile | None = File(default=None),
    image3: UploadFile | None = File(default=None),
    service: PromoService = Depends(get_talent_service),
) -> JSONResponse:
    row = await service.update(
        talent_id,
        {
            "name": name,
            "gender": gender,
            "age": age,
            "location": location,
            "height": height,
            "hair_color": hair_color,
            "shoe_size": shoe_size,
            "eye_color": eye_color,
        },
        {"profile_img": profile_img, "image1": image1, "image2": image2, "image3": image3},
    )
    return envelope(
        "Featured talent updated successfully", service.to_payload(row, str(request.base_url))
    )


@router.delete("/featured-talents/{talent_id}", dependencies=admin_only)
def delete_featured_talent(
    talent_id: int, service: PromoService = Depends(get_talent_service)
) -> JSONResponse:
    service.delete(talent_id)
    return envelope("Talent and image deleted successfully")


# Testimonials


@router.post("/testimonials", dependencies=admin_only)
async def add_testimonial(
    request: Request,
    name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    them: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
    service: PromoService = Depends(get_testimonial_service),
) -> JSONResponse:
    row = await service.create(
        {"name": name, "description": description, "them": them}, {"avatar": avatar}
    )
    return created(
        "Testimonial added successfully", service.to_payload(row, str(request.base_url))
    )


@router.get("/testimonials")
def list_testimonials(
    request: Request, service: PromoService = Depends(get_testimonial_service)
) -> JSONResponse:
    return envelope(
        "Testimonials fetched successfully", service.list_entities(str(request.base_url))
    )


@router.put("/testimonials/{testimonial_id}", dependencies=admin_only)
async def update_testimonial(
    testimonial_id: int,
    request: Request,
    name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    them: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
    service: PromoService = Depends(get_testimonial_service),
) -> JSONResponse:
    row = await service.update(
        testimonial_id,
        {"name": name, "description": description, "them": them},
        {"avatar": avatar},
    )
    return envelope(
        "Testimonial updated successfully", service.to_payload(row, str(request.base_url))
    )


@router.delete("/testimonials/{testimonial_id}", dependencies=admin_only)
def delete_testimonial(
    testimonial_id: int, service: PromoService = Depends(get_testimonial_service)
) -> JSONResponse:
    service.delete(testimonial_id)
    return envelope("Testimonial and image deleted successfully")
