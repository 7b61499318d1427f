# app/core/__init__.py

from .config import get_settings, Settings, DualMembershipPolicy
from .exceptions import (
    CatalogError,
    InvariantViolation,
    CatalogNotFound,
    ValidationError,
    PersistenceError,
    TMDBError,
)
from .logging_setup import setup_logging

__all__ = [
    "get_settings",
    "Settings",
    "DualMembershipPolicy",
    "CatalogError",
    "InvariantViolation",
    "CatalogNotFound",
    "ValidationError",
    "PersistenceError",
    "TMDBError",
    "setup_logging",
]
