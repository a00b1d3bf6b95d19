import uuid
from chemistry.extensions import db
from chemistry.utils.timestamps import utcnow


def new_id():
    return str(uuid.uuid4())


class BaseModel(db.Model):
    """String UUID key plus UTC creation and modification stamps."""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=new_id, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)
