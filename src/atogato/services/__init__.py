from src.atogato.services.project_service import (
    ImageUpload,
    ProjectCreateResult,
    ProjectService,
)

__all__ = ["ImageUpload", "ProjectCreateResult", "ProjectService"]
