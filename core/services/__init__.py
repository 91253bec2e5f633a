# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .project_service import ProjectService
from .category_service import CategoryService
from .blog_service import BlogService
from .experience_service import ExperienceService
from .user_service import UserService
from .storage_service import StorageService
from .upload_service import UploadService

__all__ = [
    "ProjectService",
    "CategoryService",
    "BlogService",
    "ExperienceService",
    "UserService",
    "StorageService",
    "UploadService",
]
