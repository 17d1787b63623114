from src.atogato.schemas.auth import Principal, TokenType
from src.atogato.schemas.project import (
    ImageUploadResult,
    ProjectCreate,
    ProjectCreateResponse,
    ProjectImage,
    ProjectRead,
    ProjectReplace,
    ProjectUpdate,
)

__all__ = [
    # Auth
    "Principal",
    "TokenType",
    # Project
    "ImageUploadResult",
    "ProjectCreate",
    "ProjectCreateResponse",
    "ProjectImage",
    "ProjectRead",
    "ProjectReplace",
    "ProjectUpdate",
]
