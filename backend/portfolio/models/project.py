from portfolio.extensions import db
from .base import BaseModel

class Project(BaseModel):
    __tablename__ = "projects"

    title = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False, default="Full Stack")
    tech_stack = db.Column(db.JSON, nullable=False, default=list)
    description = db.Column(db.Text, nullable=False)
    github_url = db.Column(db.String(512), nullable=True)
    live_url = db.Column(db.String(512), nullable=True)
    image_url = db.Column(db.String(512), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="active", index=True)  # active | hidden
