from functools import wraps
from flask import jsonify, g
from flask_jwt_extended import get_jwt_identity
from ayurclinic.models import User


def get_current_user():
    """User loaded by @require_role for this request (None outside it)."""
    return g.get('current_user')


def require_role(*roles):
    """
    Decorator to require specific roles
    Usage: @require_role('doctor', 'admin')
    With no roles, any active signed-in user passes.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            """
            Require that the current JWT-authenticated user has one of the given roles.
            Must be used together with @jwt_required() on the route.
            """
            try:
                user_id = int(get_jwt_identity())
            except (TypeError, ValueError):
                return jsonify({
                    'success': False,
                    'error': 'Authentication required'
                }), 401

            user = User.query.get(user_id)
            if not user or not user.is_active:
                return jsonify({
                    'success': False,
                    'error': 'Authentication required'
                }), 401

            if roles and user.role.value not in roles:
                return jsonify({
                    'success': False,
                    'error': f'Permission denied. Required roles: {", ".join(roles)}'
                }), 403

            g.current_user = user
            return f(*args, **kwargs)
        return decorated_function
    return decorator
