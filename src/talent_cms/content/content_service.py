"""Home media slots and static content pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import UploadFile

from ..db.db_models import PrivacyPolicyModel, TermsAndConditionsModel
from ..exceptions import NotFoundError, ValidationError
from ..media.media_storage import MediaStore
from ..media.upload_receiver import UploadReceiver
from ..slots.slot_kinds import BANNER, HOME_VIDEO, SlotKind
from ..slots.slot_replacement import SlotReplacer
from ..slots.slots_models import ReplacementResult, Slot
from ..slots.slots_repository import SlotStore
from .content_models import PLAN_DETAIL_FIELDS, HtmlPage, PlanDetails
from .content_repository import ContentRepository, LegalPageModel

logger = logging.getLogger(__name__)

HOME_VIDEO_ID = 1


@dataclass(slots=True)
class HomeMediaService:
    """Home video and banner slots.

    Every upload goes through :class:`SlotReplacer`, so the new reference is
    committed before the file it supersedes is deleted.
    """

    store: SlotStore
    replacer: SlotReplacer
    receiver: UploadReceiver
    media: MediaStore

    def home_video(self) -> Slot:
        slot = self.store.read(HOME_VIDEO.key(HOME_VIDEO_ID))
        if not slot.current_file:
            raise NotFoundError("No home video found")
        return slot

    async def replace_home_video(self, upload: UploadFile | None) -> ReplacementResult:
        received = await self.receiver.receive(HOME_VIDEO, upload)
        return self.replacer.replace(HOME_VIDEO.key(HOME_VIDEO_ID), received)

    def clear_home_video(self) -> ReplacementResult:
        return self.replacer.clear(HOME_VIDEO.key(HOME_VIDEO_ID))

    def banners(self) -> list[Slot]:
        slots = self.store.list_slots(BANNER)
        if not slots:
            raise NotFoundError("No banners found")
        return slots

    async def replace_banner(self, banner_id: int, upload: UploadFile | None) -> ReplacementResult:
        received = await self.receiver.receive(BANNER, upload)
        return self.replacer.replace(BANNER.key(banner_id), received)

    def clear_banner(self, banner_id: int) -> ReplacementResult:
        return self.replacer.clear(BANNER.key(banner_id))

    def slot_payload(self, kind: SlotKind, slot: Slot, base_url: str) -> dict[str, Any]:
        return {
            "id": slot.key.row_id,
            "filename": slot.current_file,
            "url": self.media.public_url(base_url, kind, slot.current_file),
            "updatedAt": slot.updated_at,
        }


_LEGAL_PAGES: dict[str, tuple[LegalPageModel, str]] = {
    "terms": (TermsAndConditionsModel, "terms and conditions"),
    "privacy": (PrivacyPolicyModel, "privacy policy"),
}


@dataclass(slots=True)
class PagesService:
    repo: ContentRepository

    def about_us(self) -> HtmlPage:
        page = self.repo.get_about_us()
        if page is None or not page.html_content:
            raise NotFoundError("No About Us content found")
        return page

    def update_about_us(self, html_content: Any) -> HtmlPage:
        if not html_content or not isinstance(html_content, str):
            raise ValidationError("No HTML content provided")
        page = self.repo.update_about_us(html_content)
        logger.info("content.about_us.updated", extra={"length": len(html_content)})
        return page

    def legal_page(self, page: str) -> HtmlPage:
        model, label = _LEGAL_PAGES[page]
        found = self.repo.get_legal_page(model)
        if found is None:
            raise NotFoundError(f"No {label} found")
        return found

    def update_legal_page(self, page: str, html_content: Any) -> HtmlPage:
        model, label = _LEGAL_PAGES[page]
        if not html_content or not isinstance(html_content, str):
            raise ValidationError("Invalid content")
        updated = self.repo.update_legal_page(model, html_content)
        if updated is None:
            raise NotFoundError(f"No {label} found to update")
        logger.info("content.legal_page.updated", extra={"page": page})
        return updated

    def plan_details(self) -> PlanDetails:
        plan = self.repo.get_plan_details()
        if plan is None:
            raise NotFoundError("No plan details found")
        return plan

    def update_plan_details(self, values: dict[str, Any]) -> PlanDetails:
        changes = {key: value for key, value in values.items() if key in PLAN_DETAIL_FIELDS}
        if not changes:
            raise ValidationError("No plan details provided")
        return self.repo.update_plan_details(changes)


__all__ = ["HOME_VIDEO_ID", "HomeMediaService", "PagesService"]
