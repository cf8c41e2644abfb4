from .screen import CollectionScreen, UploadTarget
from .screens import (
    BlogScreen,
    ProjectScreen,
    CertificateScreen,
    ExperimentScreen,
    SkillCategoryScreen,
    SkillScreen,
    MessageScreen,
    SCREENS,
)
from .settings import SettingsService, ASSET_TARGETS
from .dashboard import dashboard_summary

__all__ = [
    "CollectionScreen",
    "UploadTarget",
    "BlogScreen",
    "ProjectScreen",
    "CertificateScreen",
    "ExperimentScreen",
    "SkillCategoryScreen",
    "SkillScreen",
    "MessageScreen",
    "SCREENS",
    "SettingsService",
    "ASSET_TARGETS",
    "dashboard_summary",
]
