from functools import wraps
from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt


def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            user = g.get("current_user")
            if user is None or not user.is_active:
                return jsonify({"error": "User account disabled"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def feature_enabled(feature_name):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            features = current_app.config.get("CHEMISTRY_FEATURES", {})

            if feature_name not in features:
                return jsonify({"error": "Feature not recognized"}), 400

            if not features[feature_name]:
                return jsonify({
                    "error": f"Feature '{feature_name}' is disabled"
                }), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
