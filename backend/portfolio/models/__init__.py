from .section import Section
from .blog import Blog
from .project import Project
from .certificate import Certificate
from .experiment import Experiment
from .skill import SkillCategory, Skill
from .message import Message
from .site_settings import SiteSettings
from .user import User
from .audit_log import AuditLog

__all__ = [
    "Section",
    "Blog",
    "Project",
    "Certificate",
    "Experiment",
    "SkillCategory",
    "Skill",
    "Message",
    "SiteSettings",
    "User",
    "AuditLog",
]
