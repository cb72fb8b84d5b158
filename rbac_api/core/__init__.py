"""Core app configuration, errors and token primitives."""

from rbac_api.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
