from fastapi import APIRouter

from src.studio.api.v1 import invoices, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(invoices.router)
