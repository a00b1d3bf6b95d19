from chemistry.extensions import db
from .base import BaseModel


class Social(BaseModel):
    __tablename__ = "socials"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    platform = db.Column(db.String(50), nullable=False)  # twitter, instagram, youtube
    name = db.Column(db.String(200), nullable=True)
    reference = db.Column(db.String(200), nullable=True)
    url = db.Column(db.String(512), nullable=True)

    page = db.relationship("Page", back_populates="socials")
