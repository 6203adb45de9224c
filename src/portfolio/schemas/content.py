"""
Request and response schemas for the public content entities.

Each entity has a create schema, an update schema with the same rules where
every field is optional, a read schema, and (where listing supports it) a
query schema with equality filters.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, StringConstraints

from .base import InputSchema, ListQuery, NonEmpty, ReadSchema, Url

# --- Blog posts ---

BlogTitle = Annotated[str, StringConstraints(min_length=5, max_length=200)]
BlogContent = Annotated[str, StringConstraints(min_length=20)]
BlogSummary = Annotated[str, StringConstraints(max_length=300)]
Author = Annotated[str, StringConstraints(min_length=1, max_length=100)]


class BlogPostCreate(InputSchema):
    title: BlogTitle
    content: BlogContent
    summary: BlogSummary | None = None
    tags: list[NonEmpty] = Field(default_factory=list)
    author: Author = "Admin"
    published_at: datetime | None = None
    is_published: bool = False


class BlogPostUpdate(InputSchema):
    title: BlogTitle | None = None
    content: BlogContent | None = None
    summary: BlogSummary | None = None
    tags: list[NonEmpty] | None = None
    author: Author | None = None
    published_at: datetime | None = None
    is_published: bool | None = None


class BlogPostRead(ReadSchema):
    title: str
    slug: str
    content: str
    summary: str | None = None
    tags: list[str] = []
    author: str
    published_at: datetime | None = None
    is_published: bool
    views_count: int


class BlogPostQuery(ListQuery):
    is_published: bool | None = None
    author: str | None = None


# --- Projects ---

ProjectTitle = Annotated[str, StringConstraints(min_length=3, max_length=100)]
ProjectDescription = Annotated[str, StringConstraints(min_length=10, max_length=500)]
TechStack = Annotated[list[NonEmpty], Field(min_length=1)]


class ProjectCreate(InputSchema):
    title: ProjectTitle
    description: ProjectDescription
    tech_stack: TechStack
    repo_url: Url | None = None
    demo_url: Url | None = None
    images: list[Url] = Field(default_factory=list)
    tags: list[NonEmpty] = Field(default_factory=list)
    featured: bool = False


class ProjectUpdate(InputSchema):
    title: ProjectTitle | None = None
    description: ProjectDescription | None = None
    tech_stack: TechStack | None = None
    repo_url: Url | None = None
    demo_url: Url | None = None
    images: list[Url] | None = None
    tags: list[NonEmpty] | None = None
    featured: bool | None = None


class ProjectRead(ReadSchema):
    title: str
    slug: str
    description: str
    tech_stack: list[str]
    repo_url: str | None = None
    demo_url: str | None = None
    images: list[str] = []
    tags: list[str] = []
    featured: bool


class ProjectQuery(ListQuery):
    featured: bool | None = None


# --- Skills ---

SkillName = Annotated[str, StringConstraints(min_length=2, max_length=50)]
SkillLevel = Literal["Beginner", "Intermediate", "Advanced", "Expert"]
SkillCategory = Literal["Frontend", "Backend", "DevOps", "Database", "Other"]
Short = Annotated[str, StringConstraints(max_length=255)]


class SkillCreate(InputSchema):
    name: SkillName
    level: SkillLevel
    category: SkillCategory
    icon: Short | None = None
    color: Annotated[str, StringConstraints(max_length=30)] | None = None


class SkillUpdate(InputSchema):
    name: SkillName | None = None
    level: SkillLevel | None = None
    category: SkillCategory | None = None
    icon: Short | None = None
    color: Annotated[str, StringConstraints(max_length=30)] | None = None


class SkillRead(ReadSchema):
    name: str
    slug: str
    level: str
    category: str
    icon: str | None = None
    color: str | None = None


class SkillQuery(ListQuery):
    level: SkillLevel | None = None
    category: SkillCategory | None = None


# --- Experience ---

Role = Annotated[str, StringConstraints(min_length=2, max_length=100)]
Organization = Annotated[str, StringConstraints(min_length=2, max_length=100)]
Place = Annotated[str, StringConstraints(max_length=100)]
StartDate = Annotated[str, StringConstraints(min_length=4, max_length=30)]
EndDate = Annotated[str, StringConstraints(max_length=30)]
Description = Annotated[str, StringConstraints(min_length=10, max_length=500)]


class ExperienceCreate(InputSchema):
    role: Role
    company: Organization
    location: Place | None = None
    start_date: StartDate
    end_date: EndDate | None = None
    description: Description
    technologies: list[NonEmpty] = Field(default_factory=list)
    is_current: bool = False


class ExperienceUpdate(InputSchema):
    role: Role | None = None
    company: Organization | None = None
    location: Place | None = None
    start_date: StartDate | None = None
    end_date: EndDate | None = None
    description: Description | None = None
    technologies: list[NonEmpty] | None = None
    is_current: bool | None = None


class ExperienceRead(ReadSchema):
    role: str
    slug: str
    company: str
    location: str | None = None
    start_date: str
    end_date: str | None = None
    description: str
    technologies: list[str] = []
    is_current: bool


class ExperienceQuery(ListQuery):
    is_current: bool | None = None


# --- Education ---

Degree = Annotated[str, StringConstraints(min_length=2, max_length=100)]
OptionalDescription = Annotated[str, StringConstraints(max_length=500)]


class EducationCreate(InputSchema):
    degree: Degree
    institution: Organization
    start_date: StartDate
    end_date: EndDate | None = None
    location: Place | None = None
    description: OptionalDescription | None = None


class EducationUpdate(InputSchema):
    degree: Degree | None = None
    institution: Organization | None = None
    start_date: StartDate | None = None
    end_date: EndDate | None = None
    location: Place | None = None
    description: OptionalDescription | None = None


class EducationRead(ReadSchema):
    degree: str
    slug: str
    institution: str
    start_date: str
    end_date: str | None = None
    location: str | None = None
    description: str | None = None
