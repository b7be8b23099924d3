"""Dependency wiring helpers."""

from datetime import timedelta

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .admin.admin_api import router as admin_router
from .admin.admin_service import DashboardService
from .auth.auth_service import AuthService
from .auth.auth_tokens import TokenCodec
from .config import AppConfig
from .content.content_api import router as content_router
from .content.content_repository import ContentRepository
from .content.content_service import HomeMediaService, PagesService
from .media.media_storage import MediaStore
from .media.upload_receiver import UploadReceiver
from .promo.promo_api import router as promo_router
from .promo.promo_models import CATEGORY_ENTITY, FEATURED_TALENT_ENTITY, TESTIMONIAL_ENTITY
from .promo.promo_repository import PromoRepository
from .promo.promo_service import PromoService
from .slots.slot_kinds import SLOT_KINDS
from .slots.slot_replacement import SlotReplacer
from .slots.slots_repository import SlotStore
from .users.users_api import router as users_router
from .users.users_repository import UsersRepository
from .users.users_service import UserService


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    media = MediaStore(config.media_root)
    for kind in SLOT_KINDS.values():
        media.ensure_directory(kind)
    slot_store = SlotStore(config.session_factory)
    replacer = SlotReplacer(store=slot_store, media=media)
    receiver = UploadReceiver(limits=config.upload_limits, media=media)

    token_codec = TokenCodec(
        signing_key=config.jwt_signing_key,
        token_ttl=timedelta(hours=config.admin_jwt_ttl_hours),
    )
    user_tokens = TokenCodec(
        signing_key=config.jwt_signing_key,
        token_ttl=timedelta(hours=config.user_jwt_ttl_hours),
    )
    auth_service = AuthService.from_file(config.admin_credentials_path, token_codec)

    promo_repo = PromoRepository(config.session_factory)
    users_repo = UsersRepository(config.session_factory)

    app.state.config = config
    app.state.media = media
    app.state.slot_store = slot_store
    app.state.replacer = replacer
    app.state.receiver = receiver
    app.state.token_codec = token_codec
    app.state.auth_service = auth_service
    app.state.home_media_service = HomeMediaService(
        store=slot_store, replacer=replacer, receiver=receiver, media=media
    )
    app.state.pages_service = PagesService(repo=ContentRepository(config.session_factory))
    app.state.promo_services = {
        entity.kind.name: PromoService(
            entity=entity,
            repo=promo_repo,
            replacer=replacer,
            receiver=receiver,
            media=media,
        )
        for entity in (CATEGORY_ENTITY, FEATURED_TALENT_ENTITY, TESTIMONIAL_ENTITY)
    }
    app.state.user_service = UserService(repo=users_repo, tokens=user_tokens)
    app.state.dashboard_service = DashboardService(repo=users_repo)

    app.include_router(content_router)
    app.include_router(promo_router)
    app.include_router(admin_router)
    app.include_router(users_router)

    app.mount("/uploads", StaticFiles(directory=config.media_root), name="uploads")
