"""API v1 router aggregation."""

from fastapi import APIRouter

from tawjih.api.v1.catalog import exams_router, guidance_router, jobs_router
from tawjih.api.v1.search import router as search_router
from tawjih.api.v1.admin import router as admin_router
from tawjih.api.v1.users import router as users_router

router = APIRouter(prefix="/api/v1")

router.include_router(jobs_router)
router.include_router(guidance_router)
router.include_router(exams_router)
router.include_router(search_router)
router.include_router(admin_router)
router.include_router(users_router)
