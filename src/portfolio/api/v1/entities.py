"""
CRUD routes generated once per content entity.

    POST   /{entity}              create            (admin)
    GET    /{entity}              list, paginated
    GET    /{entity}/slug/{slug}  fetch by slug
    GET    /{entity}/{id}         fetch by id
    PATCH  /{entity}/{id}         partial update    (admin)
    DELETE /{entity}/{id}         delete            (admin)
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.deps import get_db_session, require_admin
from portfolio.services.entities import EntitySpec
from portfolio.services.mutation import MutationService
from .error_handlers import translated


async def read_json(request: Request) -> Any:
    """Raises json.JSONDecodeError / UnicodeDecodeError for unparseable bodies."""
    return json.loads(await request.body())


def build_entity_router(spec: EntitySpec) -> APIRouter:
    router = APIRouter(prefix=f"/{spec.name}", tags=[spec.name])
    admin_only = [Depends(require_admin)]

    @router.post("", dependencies=admin_only)
    @translated
    async def create_entity(request: Request, db: AsyncSession = Depends(get_db_session)):
        record = await MutationService(spec, db).create(await read_json(request))
        return JSONResponse(status_code=201, content=record.to_response())

    @router.get("")
    @translated
    async def list_entities(request: Request, db: AsyncSession = Depends(get_db_session)):
        page = await MutationService(spec, db).list_page(dict(request.query_params))
        return JSONResponse(content=page.to_response())

    if spec.slug_field:
        @router.get("/slug/{slug}")
        @translated
        async def get_entity_by_slug(slug: str, db: AsyncSession = Depends(get_db_session)):
            record = await MutationService(spec, db).get_by_slug(slug)
            return JSONResponse(content=record.to_response())

    @router.get("/{entity_id}")
    @translated
    async def get_entity(entity_id: str, db: AsyncSession = Depends(get_db_session)):
        record = await MutationService(spec, db).get_by_id(entity_id)
        return JSONResponse(content=record.to_response())

    @router.patch("/{entity_id}", dependencies=admin_only)
    @translated
    async def update_entity(entity_id: str, request: Request, db: AsyncSession = Depends(get_db_session)):
        record = await MutationService(spec, db).update(entity_id, await read_json(request))
        return JSONResponse(content=record.to_response())

    @router.delete("/{entity_id}", dependencies=admin_only)
    @translated
    async def delete_entity(entity_id: str, db: AsyncSession = Depends(get_db_session)):
        record = await MutationService(spec, db).delete(entity_id)
        return JSONResponse(content=record.to_response())

    return router
