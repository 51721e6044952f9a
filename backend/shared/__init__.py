"""
Shared infrastructure for the CLKK backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging: Root logger setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, get_supabase_public_client, reset_client_cache
from .exceptions import (
    ClkkError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ExternalServiceError,
)
from .logging import setup_logging
from .models import Identity

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_supabase_public_client",
    "reset_client_cache",
    "ClkkError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "ExternalServiceError",
    "setup_logging",
    "Identity",
]
