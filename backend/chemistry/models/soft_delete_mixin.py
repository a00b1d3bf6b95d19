from chemistry.extensions import db
from chemistry.utils.timestamps import utcnow


class SoftDeleteMixin:
    """Rows hidden from the page but kept until the page itself is deleted."""
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def soft_delete(self, when=None):
        self.deleted_at = when or utcnow()

    @property
    def is_deleted(self):
        return self.deleted_at is not None
