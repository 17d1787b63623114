from fastapi import APIRouter

from src.atogato.api.v1 import projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
