from portfolio.extensions import db
from .base import BaseModel

class Message(BaseModel):
    __tablename__ = "messages"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="unread", index=True)  # unread | read
