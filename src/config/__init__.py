"""
Application configuration using Pydantic settings.

Configuration comes from environment variables and command-line flags,
with defaults matching the production bucket.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
