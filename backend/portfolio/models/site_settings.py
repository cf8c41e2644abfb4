from portfolio.extensions import db
from .base import BaseModel

class SiteSettings(BaseModel):
    """Single-row table holding site-wide asset URLs."""
    __tablename__ = "site_settings"

    logo_url = db.Column(db.String(512), nullable=True)
    hero_image_url = db.Column(db.String(512), nullable=True)
    resume_url = db.Column(db.String(512), nullable=True)
