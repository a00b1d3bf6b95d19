from chemistry.extensions import db
from .base import BaseModel


class SectionType(BaseModel):
    __tablename__ = "section_types"

    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)  # hero, features, gallery
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
