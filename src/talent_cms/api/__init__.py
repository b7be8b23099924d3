"""Shared HTTP envelope and exception handling."""

from .errors import register_exception_handlers
from .responses import created, envelope, error_envelope

__all__ = ["created", "envelope", "error_envelope", "register_exception_handlers"]
