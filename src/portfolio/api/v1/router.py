from fastapi import APIRouter

from portfolio.services.entities import CONTENT_ENTITIES
from . import admin
from .entities import build_entity_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(admin.router)
for _spec in CONTENT_ENTITIES:
    api_router.include_router(build_entity_router(_spec))
