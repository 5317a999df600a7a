from functools import wraps
from flask import abort
from flask_login import current_user

def role_required(*roles):
    """Allow the view only for authenticated users holding one of ``roles``."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if getattr(current_user, "role", None) not in roles:
                abort(403)
            return view(*args, **kwargs)
        return wrapped
    return decorator

hr_required = role_required("HR")
staff_required = role_required("HR", "ASSESSOR")
