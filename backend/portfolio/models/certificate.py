from portfolio.extensions import db
from .base import BaseModel

class Certificate(BaseModel):
    __tablename__ = "certificates"

    title = db.Column(db.String(200), nullable=False)
    issuer = db.Column(db.String(200), nullable=False)
    issue_date = db.Column(db.Date, nullable=False, index=True)
    credential_url = db.Column(db.String(512), nullable=True)
    image_url = db.Column(db.String(512), nullable=True)
