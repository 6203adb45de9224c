from .base import IdParam, InputSchema, ListQuery, Page, ReadSchema
from .admin import AdminCreate, AdminLogin, AdminQuery, AdminRead, AdminUpdate
from .content import (
    BlogPostCreate, BlogPostQuery, BlogPostRead, BlogPostUpdate,
    EducationCreate, EducationRead, EducationUpdate,
    ExperienceCreate, ExperienceQuery, ExperienceRead, ExperienceUpdate,
    ProjectCreate, ProjectQuery, ProjectRead, ProjectUpdate,
    SkillCreate, SkillQuery, SkillRead, SkillUpdate,
)
