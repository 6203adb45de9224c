import jwt
import pytest

from portfolio.core.security import decode_access_token, verify_password
from portfolio.exceptions import CredentialsError, DuplicityError, NotFoundError, ValidationError
from portfolio.models import Admin
from portfolio.services.admin_auth import AdminAuthService


@pytest.mark.asyncio
class TestAdminMutations:

    async def test_create_hashes_password_and_hides_it(self, db_session, created_admin):
        """
        Behavior:
            - The stored password is a hash that verifies against the original.
            - The read model returned to callers carries no password at all.
        """
        stored = await db_session.get(Admin, created_admin.id)

        assert stored.password != "correct-horse"
        assert stored.password.startswith("$2b$")
        assert verify_password("correct-horse", stored.password)
        assert "password" not in created_admin.to_response()

    async def test_duplicate_username(self, admin_service, created_admin, admin_payload):
        with pytest.raises(DuplicityError) as exc_info:
            await admin_service.create(admin_payload(email="other@example.com"))

        assert exc_info.value.details["conflictType"] == "username"
        assert "slug" not in exc_info.value.details

    async def test_duplicate_email(self, admin_service, created_admin, admin_payload):
        with pytest.raises(DuplicityError) as exc_info:
            await admin_service.create(admin_payload(username="Other Admin"))

        assert exc_info.value.details["conflictType"] == "email"
        assert exc_info.value.details["email"] == "admin@example.com"

    async def test_email_change_into_existing_email_is_rejected(self, admin_service, created_admin, admin_payload):
        other = await admin_service.create(admin_payload(username="Second Admin", email="second@example.com"))

        with pytest.raises(DuplicityError) as exc_info:
            await admin_service.update(other.id, {"email": "admin@example.com"})

        assert exc_info.value.details["conflictType"] == "email"

    async def test_password_change_is_rehashed(self, db_session, admin_service, created_admin):
        await admin_service.update(created_admin.id, {"password": "brand-new-pass"})

        stored = await db_session.get(Admin, created_admin.id)
        assert verify_password("brand-new-pass", stored.password)
        assert not verify_password("correct-horse", stored.password)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"username": "ab"},
            {"username": "Admin 2"},
            {"email": "not-an-email"},
            {"password": "short"},
            {"password": "x" * 21},
        ],
    )
    async def test_registration_rules(self, admin_service, admin_payload, overrides):
        with pytest.raises(ValidationError):
            await admin_service.create(admin_payload(**overrides))


@pytest.mark.asyncio
class TestAdminAuthService:

    async def test_authenticate_success(self, db_session, created_admin):
        auth = AdminAuthService(db_session)

        identity = await auth.authenticate({"username": "Site Admin", "password": "correct-horse"})

        assert identity == {"id": created_admin.id, "username": "Site Admin"}

    async def test_wrong_password(self, db_session, created_admin):
        auth = AdminAuthService(db_session)

        with pytest.raises(CredentialsError) as exc_info:
            await auth.authenticate({"username": "Site Admin", "password": "wrong-horse"})

        assert exc_info.value.http_status() == 401
        assert exc_info.value.to_payload() == {"error": "Invalid credentials", "type": "CREDENTIALS"}

    async def test_unknown_username(self, db_session, created_admin):
        auth = AdminAuthService(db_session)

        with pytest.raises(NotFoundError):
            await auth.authenticate({"username": "Nobody Here", "password": "correct-horse"})

    async def test_malformed_login(self, db_session):
        auth = AdminAuthService(db_session)

        with pytest.raises(ValidationError):
            await auth.authenticate({"username": "Site Admin"})

    async def test_issued_token_decodes_to_admin(self, db_session, created_admin):
        identity = await AdminAuthService(db_session).authenticate(
            {"username": "Site Admin", "password": "correct-horse"}
        )

        claims = decode_access_token(AdminAuthService.issue_token(identity))

        assert claims["sub"] == created_admin.id
        assert claims["username"] == "Site Admin"

    async def test_tampered_token_is_rejected(self, db_session, created_admin):
        token = AdminAuthService.issue_token({"id": created_admin.id, "username": "Site Admin"})
        header, payload, signature = token.split(".")
        flipped = "A" if signature[10] != "A" else "B"
        tampered = f"{header}.{payload}.{signature[:10]}{flipped}{signature[11:]}"

        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(tampered)
