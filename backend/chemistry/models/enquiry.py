from chemistry.extensions import db
from .base import BaseModel


class Enquiry(BaseModel):
    __tablename__ = "enquiries"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    message = db.Column(db.Text, nullable=False)

    remote_ip = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(512), nullable=True)

    # mail headers at the time of submission
    mail_to = db.Column(db.String(254), nullable=True)
    subject = db.Column(db.String(200), nullable=True)

    closed = db.Column(db.Boolean, nullable=False, default=False, index=True)
