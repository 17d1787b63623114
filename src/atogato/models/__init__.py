"""Model exports.

Import from here: `from src.atogato.models import Project`
"""

from src.atogato.models.enums import ProjectCategory, RemoteStatus, RequiredCategory
from src.atogato.models.project import DEFAULT_LOCATION, Project

__all__ = [
    # Enums
    "ProjectCategory",
    "RemoteStatus",
    "RequiredCategory",
    # Models
    "DEFAULT_LOCATION",
    "Project",
]
