"""Registry of entity kinds that own file slots."""

from __future__ import annotations

from dataclasses import dataclass

from ..db.db_models import (
    BannerModel,
    Base,
    FeaturedTalentModel,
    HomeVideoModel,
    PopularCategoryModel,
    TestimonialModel,
)
from .slots_models import SlotKey


@dataclass(frozen=True, slots=True)
class SlotKind:
    """Describe where a kind's slots live in the database and on disk.

    ``fields`` are the file-reference columns of ``model``; the first one is
    the default when a :class:`SlotKey` carries no field. ``default_ids`` are
    rows seeded at startup for fixed-cardinality kinds. Kinds flagged with
    ``reconcile`` share an upload directory that is swept for orphans after
    every delete or replace.
    """

    name: str
    model: type[Base]
    fields: tuple[str, ...]
    directory: str
    media: str
    limit: str
    default_ids: tuple[int, ...] = ()
    reconcile: bool = False

    def column(self, field: str | None) -> str:
        column = field or self.fields[0]
        if column not in self.fields:
            raise KeyError(f"{self.name} has no slot field '{column}'")
        return column

    def key(self, row_id: int, field: str | None = None) -> SlotKey:
        if len(self.fields) == 1:
            field = None
        return SlotKey(kind=self.name, row_id=row_id, field=field)


HOME_VIDEO = SlotKind(
    name="homeVideo",
    model=HomeVideoModel,
    fields=("video_path",),
    directory="HomeVideo",
    media="video",
    limit="video_limit_mb",
    default_ids=(1,),
)
BANNER = SlotKind(
    name="banner",
    model=BannerModel,
    fields=("image_path",),
    directory="banners",
    media="image",
    limit="banner_limit_mb",
    default_ids=(1, 2),
)
CATEGORY = SlotKind(
    name="category",
    model=PopularCategoryModel,
    fields=("avatar",),
    directory="categoryImg",
    media="image",
    limit="avatar_limit_mb",
)
FEATURED_TALENT = SlotKind(
    name="featuredTalent",
    model=FeaturedTalentModel,
    fields=("profile_img", "image1", "image2", "image3"),
    directory="featuredImg",
    media="image",
    limit="talent_limit_mb",
    reconcile=True,
)
TESTIMONIAL = SlotKind(
    name="testimonial",
    model=TestimonialModel,
    fields=("avatar",),
    directory="testimonialsImg",
    media="image",
    limit="avatar_limit_mb",
    reconcile=True,
)

SLOT_KINDS: dict[str, SlotKind] = {
    kind.name: kind
    for kind in (HOME_VIDEO, BANNER, CATEGORY, FEATURED_TALENT, TESTIMONIAL)
}


def get_kind(name: str) -> SlotKind:
    try:
        return SLOT_KINDS[name]
    except KeyError:
        raise KeyError(f"Unknown slot kind '{name}'") from None


__all__ = [
    "BANNER",
    "CATEGORY",
    "FEATURED_TALENT",
    "HOME_VIDEO",
    "SLOT_KINDS",
    "TESTIMONIAL",
    "SlotKind",
    "get_kind",
]
