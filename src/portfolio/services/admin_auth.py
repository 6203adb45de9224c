"""Admin login: check a username/password pair and issue an access token."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.security import create_access_token, verify_password
from portfolio.exceptions.base import CredentialsError, NotFoundError
from portfolio.exceptions.boundary import operation_boundary
from portfolio.models import Admin
from portfolio.repositories.base_repository import BaseRepository
from portfolio.schemas import AdminLogin
from portfolio.validators.schema_validator import validate

logger = logging.getLogger(__name__)


class AdminAuthService:
    def __init__(self, db: AsyncSession, repository: BaseRepository[Admin] | None = None):
        self.repository = repository or BaseRepository(Admin, db, "Admin")

    async def authenticate(self, payload: Any) -> dict[str, str]:
        """
        Returns {"id", "username"} for a valid pair.

        Raises:
            ValidationError: payload does not match the login schema
            NotFoundError: no admin with that username
            CredentialsError: the password does not match
        """
        async with operation_boundary("admin", "login"):
            credentials = validate(AdminLogin, payload, "Admin login")

            admin = await self.repository.find_one(Admin.username == credentials.username)
            if admin is None:
                raise NotFoundError("Admin not found", details={"username": credentials.username})

            if not verify_password(credentials.password, admin.password):
                raise CredentialsError("Invalid credentials", internal_message=f"password mismatch for {admin.id}")

            logger.info("admin.login.success", extra={"id": admin.id})
            return {"id": admin.id, "username": admin.username}

    @staticmethod
    def issue_token(identity: dict[str, str]) -> str:
        return create_access_token(identity["id"], {"username": identity["username"]})
