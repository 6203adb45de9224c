"""
Fixtures for service tests: request payloads (camelCase, as a client sends
them) and MutationService instances bound to the test session.
"""

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.services.entities import ADMINS, BLOG_POSTS
from portfolio.services.mutation import MutationService

Faker.seed(1234)


def _text(faker: Faker, min_length: int, max_length: int) -> str:
    """Faker text padded or cut to fit a length window."""
    text = faker.text(max_nb_chars=max_length)
    return text.ljust(min_length, ".")[:max_length]


@pytest.fixture
def fake() -> Faker:
    return Faker()


@pytest.fixture
def blog_payload(fake: Faker):
    """
    Factory for blog post payloads.

    Usage:
        payload = blog_payload(title="My First Post")
    """
    def _make(**overrides):
        data = {
            "title": "My First Post",
            "content": _text(fake, 20, 400),
            "summary": _text(fake, 1, 120),
            "tags": ["python", "fastapi"],
            "isPublished": True,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def project_payload(fake: Faker):
    def _make(**overrides):
        data = {
            "title": "Portfolio Site",
            "description": _text(fake, 10, 300),
            "techStack": ["Python", "SQLAlchemy"],
            "repoUrl": "https://github.com/example/portfolio",
            "featured": True,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def skill_payload():
    def _make(**overrides):
        data = {"name": "Python", "level": "Expert", "category": "Backend"}
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def experience_payload(fake: Faker):
    def _make(**overrides):
        data = {
            "role": "Backend Engineer",
            "company": fake.company()[:100].ljust(2, "x"),
            "startDate": "2021-03",
            "description": _text(fake, 10, 300),
            "technologies": ["Python"],
            "isCurrent": True,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def education_payload():
    def _make(**overrides):
        data = {
            "degree": "BSc Computer Science",
            "institution": "State University",
            "startDate": "2015",
            "endDate": "2019",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def admin_payload():
    def _make(**overrides):
        data = {
            "username": "Site Admin",
            "email": "admin@example.com",
            "password": "correct-horse",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def blog_service(db_session: AsyncSession) -> MutationService:
    return MutationService(BLOG_POSTS, db_session)


@pytest.fixture
def admin_service(db_session: AsyncSession) -> MutationService:
    return MutationService(ADMINS, db_session)


@pytest.fixture
async def created_admin(admin_service: MutationService, admin_payload):
    """A persisted admin created through the full pipeline (password hashed)."""
    return await admin_service.create(admin_payload())
