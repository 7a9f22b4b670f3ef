"""
Stacks API package.

Provides the FastAPI application for the Stacks accounts and entitlements service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
