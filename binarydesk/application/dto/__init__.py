"""Application DTOs - Data Transfer Objects for use cases."""
from binarydesk.application.dto.settings_dto import UserSettingsUpdate
from binarydesk.application.dto.state_dto import PlatformStateDTO

__all__ = [
    "PlatformStateDTO",
    "UserSettingsUpdate",
]
