"""Administration endpoints."""

from iam.presentation.admin.routes import router

__all__ = ["router"]
