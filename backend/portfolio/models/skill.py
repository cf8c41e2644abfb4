from portfolio.extensions import db
from .base import BaseModel

class SkillCategory(BaseModel):
    __tablename__ = "skill_categories"

    name = db.Column(db.String(100), nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    # Deleting a category removes its skills
    skills = db.relationship(
        "Skill",
        back_populates="category",
        order_by="Skill.order_index",
        cascade="all, delete-orphan"
    )


class Skill(BaseModel):
    __tablename__ = "skills"

    name = db.Column(db.String(100), nullable=False)
    category_id = db.Column(
        db.String(36),
        db.ForeignKey("skill_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    order_index = db.Column(db.Integer, nullable=False, default=0)

    category = db.relationship("SkillCategory", back_populates="skills")
