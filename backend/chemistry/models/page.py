from chemistry.extensions import db
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = 'pages'

    # Tree
    parent_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True, index=True)
    slug = db.Column(db.String(200), nullable=False, index=True)
    path = db.Column(db.String(2000), nullable=False, unique=True, index=True)
    home = db.Column(db.Boolean, nullable=False, default=False, index=True)

    # Draft content, freely editable
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=True)
    excerpt = db.Column(db.Text, nullable=True)
    masthead = db.Column(db.Text, nullable=True)
    terms = db.Column(db.Text, nullable=True)
    style = db.Column(db.String(100), nullable=True)

    # Published snapshot, only written by the publish transition
    published_title = db.Column(db.String(200), nullable=True)
    published_html = db.Column(db.Text, nullable=True)
    published_excerpt = db.Column(db.Text, nullable=True)
    published_snapshot = db.Column(db.JSON(none_as_null=True), nullable=True)
    published_version = db.Column(db.Integer, nullable=False, default=0)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    private = db.Column(db.Boolean, nullable=False, default=False)

    # Navigation
    nav = db.Column(db.Boolean, nullable=False, default=False)
    nav_name = db.Column(db.String(200), nullable=True)
    nav_position = db.Column(db.Integer, nullable=False, default=0)

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)

    parent = db.relationship("Page", remote_side="Page.id", back_populates="child_pages")
    child_pages = db.relationship(
        "Page",
        back_populates="parent",
        order_by=lambda: [Page.nav_position, Page.created_at, Page.id],
    )
    versions = db.relationship(
        "PageVersion",
        order_by="PageVersion.version.desc()",
        cascade="all, delete-orphan",
    )

    # Relationship to Sections (ordered, cascade deletes)
    sections = db.relationship(
        "Section",
        back_populates="page",
        order_by="Section.position",
        cascade="all, delete-orphan"
    )
    socials = db.relationship(
        "Social",
        back_populates="page",
        order_by="Social.position",
        cascade="all, delete-orphan"
    )

    @property
    def is_published(self):
        return self.published_at is not None

    @property
    def status(self):
        return "published" if self.is_published else "draft"

    @property
    def live_sections(self):
        return [s for s in self.sections if not s.is_deleted]

    def __repr__(self):
        return f"<Page {self.id} path={self.path!r}>"
