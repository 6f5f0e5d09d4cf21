"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by use case area (auth, workspaces, admin)
following vertical slicing. Each package contains its own routes and
models. Auth is enforced per-endpoint through the context dependencies.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import admin, auth, workspaces

router = APIRouter(prefix="/api")

router.include_router(auth.router)
router.include_router(workspaces.router)
router.include_router(admin.router)

__all__ = ["router"]
