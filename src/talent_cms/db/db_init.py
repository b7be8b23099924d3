"""Database initialization helpers.

Runs once at process startup; request handlers assume every table and seed
row created here already exists.
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..slots.slot_kinds import SLOT_KINDS
from ..slots.slots_repository import SlotStore
from .db_models import (
    AboutUsModel,
    Base,
    PlanDetailModel,
    PrivacyPolicyModel,
    TermsAndConditionsModel,
)

logger = logging.getLogger(__name__)

DEFAULT_TERMS_HTML = "<p>Default Terms and Conditions Content</p>"
DEFAULT_PRIVACY_HTML = "<p>Default Privacy Policy Content</p>"


def init_db(engine: Engine, session_factory: sessionmaker[Session]) -> None:
    """Create tables, seed fixed slot rows and single-row content pages."""
    slot_store = SlotStore(session_factory)
    for kind in SLOT_KINDS.values():
        slot_store.ensure_schema(kind)

    Base.metadata.create_all(engine)

    with session_factory() as session:
        _seed_content(session)
        session.commit()


def _seed_content(session: Session) -> None:
    if session.get(AboutUsModel, 1) is None:
        session.add(AboutUsModel(id=1, html_content=None))
    if session.get(PlanDetailModel, 1) is None:
        session.add(PlanDetailModel(id=1))
    if not session.query(TermsAndConditionsModel).count():
        session.add(TermsAndConditionsModel(html_content=DEFAULT_TERMS_HTML))
        logger.info("db.seed.terms_default")
    if not session.query(PrivacyPolicyModel).count():
        session.add(PrivacyPolicyModel(html_content=DEFAULT_PRIVACY_HTML))
        logger.info("db.seed.privacy_default")
