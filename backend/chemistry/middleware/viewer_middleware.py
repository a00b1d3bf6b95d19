from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from chemistry.extensions import db
from chemistry.models.user import User


def viewer_middleware(app):
    @app.before_request
    def load_viewer():
        # Anonymous requests are fine; a token, when sent, must be valid
        g.current_user = None

        # refresh tokens pass through to /auth/refresh but never sign a viewer in
        verify_jwt_in_request(optional=True, verify_type=False)
        identity = get_jwt_identity()
        if identity is None or get_jwt().get("type") != "access":
            return

        user = db.session.get(User, identity)
        if user is not None and user.is_active:
            g.current_user = user
