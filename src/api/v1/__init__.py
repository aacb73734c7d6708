"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.groups import assignment_groups_router
from api.v1.routes.groups import router as groups_router
from api.v1.routes.peer_responses import router as peer_responses_router

router = APIRouter()
router.include_router(groups_router)
router.include_router(assignment_groups_router)
router.include_router(peer_responses_router)
