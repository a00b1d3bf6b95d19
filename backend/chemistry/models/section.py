from chemistry.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin


class Section(BaseModel, SoftDeleteMixin):
    __tablename__ = "sections"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    section_type_id = db.Column(db.String(36), db.ForeignKey("section_types.id"), nullable=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    # html fragment slots
    prefix = db.Column(db.String(200), nullable=True)
    title = db.Column(db.String(200), nullable=True)
    primary_html = db.Column(db.Text, nullable=True)
    secondary_html = db.Column(db.Text, nullable=True)
    background_html = db.Column(db.Text, nullable=True)

    page = db.relationship("Page", back_populates="sections")
    section_type = db.relationship("SectionType")

    __table_args__ = (
        db.Index("idx_section_page_position", "page_id", "position"),
    )
