from portfolio.extensions import db
from .base import BaseModel

class Experiment(BaseModel):
    __tablename__ = "experiments"

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    tech_stack = db.Column(db.JSON, nullable=False, default=list)
    notebook_url = db.Column(db.String(512), nullable=True)
    dataset_url = db.Column(db.String(512), nullable=True)
    status = db.Column(db.String(20), nullable=False, default="In Progress")  # In Progress | Completed | Planned
