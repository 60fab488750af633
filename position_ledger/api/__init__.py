"""HTTP surface: position queries, import triggers and health checks."""

from .application import APPLICATION_NAME, create_api_application

__all__ = ["APPLICATION_NAME", "create_api_application"]
