from fastapi import APIRouter

from infosys.modules.auth.router import router as auth_router
from infosys.modules.registrations.admin_router import router as admin_registrations_router
from infosys.modules.registrations.router import router as registrations_router

api_router = APIRouter()

api_router.include_router(auth_router, tags=["Authentication"])

api_router.include_router(registrations_router, tags=["Registrations"])

api_router.include_router(admin_registrations_router, tags=["Admin - Registrations"])
