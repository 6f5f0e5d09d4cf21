"""Workspace endpoints."""

from iam.presentation.workspaces.routes import router

__all__ = ["router"]
