"""
CLKK API package.

Provides the FastAPI application for the CLKK signup funnel.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
