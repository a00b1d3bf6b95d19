from flask import current_app, g, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required,
)
from chemistry.extensions import db
from chemistry.models.user import User
from . import v1_bp


def _claims(user):
    return {"role": user.role}


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    email = data.get("email")
    password = data.get("password")

    if not isinstance(email, str) or not isinstance(password, str):
        return jsonify({"error": "Email and password required"}), 400

    email = email.strip().lower()
    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        current_app.logger.warning("Failed sign-in for %s", email)
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    return jsonify({
        "access_token": create_access_token(identity=user.id, additional_claims=_claims(user)),
        "refresh_token": create_refresh_token(identity=user.id, additional_claims=_claims(user)),
    }), 200


@v1_bp.route("/auth/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    user = db.session.get(User, get_jwt_identity())
    if user is None or not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    # role is re-read so demotions take effect on the next access token
    return jsonify({
        "access_token": create_access_token(identity=user.id, additional_claims=_claims(user)),
    }), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    user = g.get("current_user")
    if user is None:
        return jsonify({"error": "User account disabled"}), 403

    return jsonify({
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "is_author": user.is_author,
    }), 200
