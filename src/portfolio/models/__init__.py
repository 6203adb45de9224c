r"""
Centralized access to all database models of the portfolio service.

Importing this package registers every table with `Base.metadata`, which is
what `create_all` in tests and `init_models()` rely on.

    from portfolio.models import BlogPost, Project, Admin
"""

from .admin import Admin
from .blog_post import BlogPost
from .education import Education
from .experience import Experience
from .project import Project
from .skill import Skill

__all__ = [
    "Admin",
    "BlogPost",
    "Education",
    "Experience",
    "Project",
    "Skill",
]
