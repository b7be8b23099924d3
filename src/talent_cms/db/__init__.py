"""Database models and initialization."""

from .db_models import Base

__all__ = ["Base"]
