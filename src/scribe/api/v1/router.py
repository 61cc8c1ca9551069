from fastapi import APIRouter

from src.scribe.api.v1 import auth, changelogs, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(changelogs.router)
api_router.include_router(projects.router)
