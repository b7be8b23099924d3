"""Persistence for single-row content pages."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from ..db.db_models import (
    AboutUsModel,
    PlanDetailModel,
    PrivacyPolicyModel,
    TermsAndConditionsModel,
    utcnow_naive,
)
from ..exceptions import handle_sqlalchemy_errors
from .content_models import PLAN_DETAIL_FIELDS, HtmlPage, PlanDetails

LegalPageModel = type[TermsAndConditionsModel] | type[PrivacyPolicyModel]


class ContentRepository:
    """Read and update about-us, legal pages and plan details."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_about_us(self) -> HtmlPage | None:
        with handle_sqlalchemy_errors(entity="about_us"):
            with self._session_factory() as session:
                row = session.get(AboutUsModel, 1)
                if row is None:
                    return None
                return HtmlPage(id=row.id, html_content=row.html_content, updated_at=row.updated_at)

    def update_about_us(self, html_content: str) -> HtmlPage:
        with handle_sqlalchemy_errors(entity="about_us"):
            with self._session_factory() as session:
                row = session.get(AboutUsModel, 1)
                if row is None:
                    row = AboutUsModel(id=1)
                    session.add(row)
                row.html_content = html_content
                row.updated_at = utcnow_naive()
                session.commit()
                return HtmlPage(id=row.id, html_content=row.html_content, updated_at=row.updated_at)

    def get_legal_page(self, model: LegalPageModel) -> HtmlPage | None:
        """Return the most recent row of a legal page table."""
        with handle_sqlalchemy_errors(entity=model.__tablename__):
            with self._session_factory() as session:
                row = session.query(model).order_by(model.id.desc()).first()
                if row is None:
                    return None
                return HtmlPage(id=row.id, html_content=row.html_content, updated_at=row.last_updated)

    def update_legal_page(self, model: LegalPageModel, html_content: str) -> HtmlPage | None:
        """Overwrite the first row; ``None`` when the table holds no page."""
        with handle_sqlalchemy_errors(entity=model.__tablename__):
            with self._session_factory() as session:
                row = session.query(model).order_by(model.id).first()
                if row is None:
                    return None
                row.html_content = html_content
                row.last_updated = utcnow_naive()
                session.commit()
                return HtmlPage(id=row.id, html_content=row.html_content, updated_at=row.last_updated)

    def get_plan_details(self) -> PlanDetails | None:
        with handle_sqlalchemy_errors(entity="plan_details"):
            with self._session_factory() as session:
                row = session.get(PlanDetailModel, 1)
                if row is None:
                    return None
                return self._to_plan(row)

    def update_plan_details(self, values: dict[str, Any]) -> PlanDetails:
        with handle_sqlalchemy_errors(entity="plan_details"):
            with self._session_factory() as session:
                row = session.get(PlanDetailModel, 1)
                if row is None:
                    row = PlanDetailModel(id=1)
                    session.add(row)
                for field_name in PLAN_DETAIL_FIELDS:
                    if field_name in values:
                        setattr(row, field_name, values[field_name])
                row.updated_at = utcnow_naive()
                session.commit()
                return self._to_plan(row)

    @staticmethod
    def _to_plan(row: PlanDetailModel) -> PlanDetails:
        return PlanDetails(
            id=row.id,
            heading=row.heading,
            description=row.description,
            plan_benefits=row.plan_benefits,
            from_whom=row.from_whom,
            why_subscribe=row.why_subscribe,
            price=row.price,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
