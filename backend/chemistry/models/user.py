from werkzeug.security import generate_password_hash, check_password_hash
from chemistry.extensions import db
from .base import BaseModel

ROLES = ("admin", "editor", "user")

# Roles allowed to create, edit and publish pages
AUTHOR_ROLES = ("admin", "editor")


class User(BaseModel):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(50), nullable=False, default='editor')
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    @property
    def is_author(self):
        return self.role in AUTHOR_ROLES

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"
