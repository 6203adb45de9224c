"""
Per-entity parameters for the generic mutation pipeline.

An `EntitySpec` names everything the pipeline needs to know about one entity:
its model, its schemas, and which fields carry identity, slug, uniqueness and
secrets. The pipeline itself contains no entity-specific branches.
"""

from dataclasses import dataclass

from portfolio.database.base import Base
from portfolio.models import Admin, BlogPost, Education, Experience, Project, Skill
from portfolio.schemas import (
    AdminCreate, AdminQuery, AdminRead, AdminUpdate,
    BlogPostCreate, BlogPostQuery, BlogPostRead, BlogPostUpdate,
    EducationCreate, EducationRead, EducationUpdate,
    ExperienceCreate, ExperienceQuery, ExperienceRead, ExperienceUpdate,
    ListQuery,
    ProjectCreate, ProjectQuery, ProjectRead, ProjectUpdate,
    SkillCreate, SkillQuery, SkillRead, SkillUpdate,
)
from portfolio.schemas.base import InputSchema, ReadSchema


@dataclass(frozen=True)
class EntitySpec:
    name: str
    label: str
    model: type[Base]
    create_schema: type[InputSchema]
    update_schema: type[InputSchema]
    read_schema: type[ReadSchema]
    identity_field: str
    slug_field: str | None = "slug"
    # other single-column unique fields checked alongside identity and slug
    unique_fields: tuple[str, ...] = ()
    # hashed before every write, never part of the read schema
    secret_fields: tuple[str, ...] = ()
    query_schema: type[ListQuery] = ListQuery
    view_counter: str | None = None


BLOG_POSTS = EntitySpec(
    name="blog",
    label="Blog post",
    model=BlogPost,
    create_schema=BlogPostCreate,
    update_schema=BlogPostUpdate,
    read_schema=BlogPostRead,
    identity_field="title",
    query_schema=BlogPostQuery,
    view_counter="views_count",
)

PROJECTS = EntitySpec(
    name="project",
    label="Project",
    model=Project,
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
    read_schema=ProjectRead,
    identity_field="title",
    query_schema=ProjectQuery,
)

SKILLS = EntitySpec(
    name="skill",
    label="Skill",
    model=Skill,
    create_schema=SkillCreate,
    update_schema=SkillUpdate,
    read_schema=SkillRead,
    identity_field="name",
    query_schema=SkillQuery,
)

EXPERIENCES = EntitySpec(
    name="experience",
    label="Experience",
    model=Experience,
    create_schema=ExperienceCreate,
    update_schema=ExperienceUpdate,
    read_schema=ExperienceRead,
    identity_field="role",
    query_schema=ExperienceQuery,
)

EDUCATIONS = EntitySpec(
    name="education",
    label="Education",
    model=Education,
    create_schema=EducationCreate,
    update_schema=EducationUpdate,
    read_schema=EducationRead,
    identity_field="degree",
)

ADMINS = EntitySpec(
    name="admin",
    label="Admin",
    model=Admin,
    create_schema=AdminCreate,
    update_schema=AdminUpdate,
    read_schema=AdminRead,
    identity_field="username",
    slug_field=None,
    unique_fields=("email",),
    secret_fields=("password",),
    query_schema=AdminQuery,
)

CONTENT_ENTITIES: tuple[EntitySpec, ...] = (BLOG_POSTS, PROJECTS, SKILLS, EXPERIENCES, EDUCATIONS)
ALL_ENTITIES: tuple[EntitySpec, ...] = (*CONTENT_ENTITIES, ADMINS)
