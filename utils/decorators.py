from __future__ import annotations
from functools import wraps
from flask import request, g, abort, current_app
from models import storage
from models.user import User


def jwt_required():
    """Require a valid bearer access token; sets g.current_user and g.current_user_id."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            # AuthError subclasses propagate to the registered error handler
            user_id = current_app.extensions["sessions"].authenticate(request.headers)
            user = storage.get(User, str(user_id))
            if not user:
                abort(401, description="User not found")
            g.current_user = user
            g.current_user_id = user_id
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required():
    """Require 'Authorization: ApiKey <key>' matching the configured Polka key."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            current_app.extensions["sessions"].authenticate_webhook(request.headers)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
