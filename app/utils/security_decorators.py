"""
Security decorators for access control
"""
from functools import wraps
from flask import abort
from flask_login import current_user


def require_role(*allowed_roles):
    """
    Decorator to ensure the current user has one of the given roles
    Usage: @require_role('employer', 'admin')
    Must be used after @login_required
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401, description="Authentication required")

            if current_user.role not in allowed_roles:
                abort(403, description=f"This action requires {' or '.join(allowed_roles)} role")

            return f(*args, **kwargs)

        return decorated_function

    return decorator


def require_admin(f):
    """
    Decorator to ensure user is an admin
    Must be used after @login_required
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401, description="Authentication required")

        if not current_user.is_admin:
            abort(403, description="Admin access required")

        return f(*args, **kwargs)

    return decorated_function
