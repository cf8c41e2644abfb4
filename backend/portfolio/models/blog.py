from portfolio.extensions import db
from .base import BaseModel

class Blog(BaseModel):
    __tablename__ = "blogs"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False)
    content = db.Column(db.Text, nullable=False)
    read_time = db.Column(db.String(50), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="published", index=True)  # published | draft
