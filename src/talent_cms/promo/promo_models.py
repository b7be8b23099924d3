"""Descriptions of the promotional entities that own file slots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..slots.slot_kinds import CATEGORY, FEATURED_TALENT, TESTIMONIAL, SlotKind

CATEGORY_GENDERS = ("Male", "Male-Female", "Female", "Boy", "Girl", "Boy-Girl")
TALENT_GENDERS = ("Male", "Female", "Boy", "Girl")


@dataclass(frozen=True, slots=True)
class PromoEntity:
    """Field rules for one promotional entity.

    ``required_fields`` and ``required_files`` apply on create only; updates
    accept any subset. ``url_fields`` maps a slot column to the key carrying
    its public URL in listings.
    """

    kind: SlotKind
    label: str
    text_fields: tuple[str, ...]
    required_fields: tuple[str, ...]
    required_files: tuple[str, ...]
    url_fields: Mapping[str, str]
    integer_fields: tuple[str, ...] = ()
    choices: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    defaults: Mapping[str, Any] = field(default_factory=dict)
    log_activity: bool = False


CATEGORY_ENTITY = PromoEntity(
    kind=CATEGORY,
    label="Category",
    text_fields=("title", "talent_count", "description", "gender"),
    required_fields=("title", "gender"),
    required_files=("avatar",),
    url_fields={"avatar": "avatarUrl"},
    integer_fields=("talent_count",),
    choices={"gender": CATEGORY_GENDERS},
    defaults={"talent_count": 0},
)

FEATURED_TALENT_ENTITY = PromoEntity(
    kind=FEATURED_TALENT,
    label="Talent",
    text_fields=(
        "name",
        "gender",
        "age",
        "location",
        "height",
        "hair_color",
        "shoe_size",
        "eye_color",
    ),
    required_fields=("name", "gender"),
    required_files=("profile_img",),
    url_fields={
        "profile_img": "profileUrl",
        "image1": "image1Url",
        "image2": "image2Url",
        "image3": "image3Url",
    },
    integer_fields=("age",),
    choices={"gender": TALENT_GENDERS},
    log_activity=True,
)

TESTIMONIAL_ENTITY = PromoEntity(
    kind=TESTIMONIAL,
    label="Testimonial",
    text_fields=("name", "description", "them"),
    required_fields=("name", "description"),
    required_files=("avatar",),
    url_fields={"avatar": "avatarUrl"},
    integer_fields=("them",),
    defaults={"them": 1},
)


__all__ = [
    "CATEGORY_ENTITY",
    "CATEGORY_GENDERS",
    "FEATURED_TALENT_ENTITY",
    "PromoEntity",
    "TALENT_GENDERS",
    "TESTIMONIAL_ENTITY",
]
