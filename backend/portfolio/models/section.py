from portfolio.extensions import db
from .base import BaseModel

class Section(BaseModel):
    __tablename__ = "sections"

    name = db.Column(db.String(100), unique=True, nullable=False)  # Hero, About, Projects ...
    is_visible = db.Column(db.Boolean, nullable=False, default=True)
    # Not unique at the database level, see find_order_conflicts()
    order_index = db.Column(db.Integer, nullable=False, default=0, index=True)
