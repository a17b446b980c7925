from functools import wraps

from flask import current_app, g, request

from ..errors import AuthError
from .security import verify_token


def require_auth(f):
    """Decorator to require an ``Authorization: Bearer <token>`` header.

    The decoded claims are stored on ``g.user``.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = request.headers.get("Authorization")
        if not header:
            raise AuthError("missing auth token")

        scheme, _, token = header.partition(" ")
        if scheme != "Bearer" or not token.strip():
            raise AuthError("invalid auth header")

        config = current_app.config["DEALSCOPE_CONFIG"]
        g.user = verify_token(token.strip(), config.jwt_secret)
        return f(*args, **kwargs)

    return decorated_function
