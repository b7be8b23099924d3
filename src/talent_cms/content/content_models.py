"""Content page dataclasses."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class HtmlPage:
    id: int
    html_content: str | None
    updated_at: datetime | None


@dataclass(slots=True)
class PlanDetails:
    id: int
    heading: str | None = None
    description: str | None = None
    plan_benefits: str | None = None
    from_whom: str | None = None
    why_subscribe: str | None = None
    price: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


PLAN_DETAIL_FIELDS = (
    "heading",
    "description",
    "plan_benefits",
    "from_whom",
    "why_subscribe",
    "price",
)
