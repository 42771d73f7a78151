"""API v1 router aggregator.

URL structure: every versioned endpoint lives under the /api/v1 prefix.
"""

from fastapi import APIRouter

from profile_wizard.api.v1 import submissions

router = APIRouter()

router.include_router(
    submissions.router, prefix="/submissions", tags=["submissions"]
)
