# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoint
# - projects.py: Portfolio project CRUD
# - categories.py: Blog category CRUD
# - blogs.py: Blog post CRUD
# - experiences.py: Work experience CRUD
# - uploads.py: Image upload to object storage
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import categories
from . import blogs
from . import experiences
from . import uploads

__all__ = [
    "health",
    "projects",
    "categories",
    "blogs",
    "experiences",
    "uploads",
]
