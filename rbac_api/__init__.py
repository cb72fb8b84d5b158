"""RBAC social feed API: JWT login and role-gated post management."""

__version__ = "1.0.0"
