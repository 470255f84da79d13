from functools import wraps
from flask import current_app, jsonify
from flask_login import current_user


def role_required(*allowed_roles):
    """
    Allow the view only for users whose role name is in ``allowed_roles``.

    Pair with ``login_required``; like it, the check is skipped when
    ``LOGIN_DISABLED`` is set.
    """
    allowed = {role.upper() for role in allowed_roles}

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if current_app.config.get("LOGIN_DISABLED"):
                return func(*args, **kwargs)

            if not current_user.is_authenticated:
                return jsonify({"error": "Authentication required"}), 401

            role_name = (getattr(current_user, "role_name", None) or "").upper()
            if role_name not in allowed:
                return jsonify({"error": "Access Denied: You do not have the required role."}), 403

            return func(*args, **kwargs)
        return wrapper
    return decorator
