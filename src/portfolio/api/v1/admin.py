from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.deps import TOKEN_COOKIE, get_db_session, require_admin
from portfolio.config import get_settings
from portfolio.services.admin_auth import AdminAuthService
from portfolio.services.entities import ADMINS
from portfolio.services.mutation import MutationService
from .entities import read_json
from .error_handlers import translated

router = APIRouter(prefix="/admin", tags=["admin"])
admin_only = [Depends(require_admin)]


@router.post("/register")
@translated
async def register(request: Request, db: AsyncSession = Depends(get_db_session)):
    service = MutationService(ADMINS, db)
    # Without any admin, the first one may bootstrap the site tokenless.
    # Count-then-create is not atomic: concurrent first registrations can all
    # pass. Turn ADMIN_OPEN_REGISTRATION off once the site is bootstrapped.
    if not get_settings().ADMIN_OPEN_REGISTRATION or await service.repository.count() > 0:
        await require_admin(request)
    record = await service.create(await read_json(request))
    return JSONResponse(status_code=201, content=record.to_response())


@router.post("/login")
@translated
async def login(request: Request, db: AsyncSession = Depends(get_db_session)):
    auth = AdminAuthService(db)
    identity = await auth.authenticate(await read_json(request))
    token = auth.issue_token(identity)

    response = JSONResponse(content={**identity, "accessToken": token, "tokenType": "bearer"})
    settings = get_settings()
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.ENV == "production",
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout():
    response = JSONResponse(content={"message": "Logged out"})
    response.delete_cookie(TOKEN_COOKIE)
    return response


@router.get("", dependencies=admin_only)
@translated
async def list_admins(request: Request, db: AsyncSession = Depends(get_db_session)):
    page = await MutationService(ADMINS, db).list_page(dict(request.query_params))
    return JSONResponse(content=page.to_response())


@router.get("/{admin_id}", dependencies=admin_only)
@translated
async def get_admin(admin_id: str, db: AsyncSession = Depends(get_db_session)):
    record = await MutationService(ADMINS, db).get_by_id(admin_id)
    return JSONResponse(content=record.to_response())


@router.patch("/{admin_id}", dependencies=admin_only)
@translated
async def update_admin(admin_id: str, request: Request, db: AsyncSession = Depends(get_db_session)):
    record = await MutationService(ADMINS, db).update(admin_id, await read_json(request))
    return JSONResponse(content=record.to_response())


@router.delete("/{admin_id}", dependencies=admin_only)
@translated
async def delete_admin(admin_id: str, db: AsyncSession = Depends(get_db_session)):
    record = await MutationService(ADMINS, db).delete(admin_id)
    return JSONResponse(content=record.to_response())
