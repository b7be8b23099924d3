"""Pydantic schemas for content page endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AboutUsUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    html_content: str | None = Field(default=None, alias="htmlContent")


class LegalPageUpdateRequest(BaseModel):
    html_content: str | None = None


class PlanDetailsUpdateRequest(BaseModel):
    heading: str | None = None
    description: str | None = None
    plan_benefits: str | None = None
    from_whom: str | None = None
    why_subscribe: str | None = None
    price: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_text(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
