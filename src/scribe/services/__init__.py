from src.scribe.services.access_service import AccessService
from src.scribe.services.auth_service import AuthService
from src.scribe.services.changelog_service import ChangelogService
from src.scribe.services.draft_generator import DraftGenerator
from src.scribe.services.generation_service import GenerationService
from src.scribe.services.project_service import ProjectService

__all__ = [
    "AccessService",
    "AuthService",
    "ChangelogService",
    "DraftGenerator",
    "GenerationService",
    "ProjectService",
]
