"""
API routes for DealScope.
"""
from typing import Any, Dict

from flask import Blueprint, current_app, g, jsonify, request
from pydantic import ValidationError

from ..auth import AuthService, require_auth
from ..errors import APIError, AuthError
from ..logger import get_logger
from ..schemas import LoginRequest, RegisterRequest
from ..search import Aggregator

logger = get_logger(__name__)

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


def get_aggregator() -> Aggregator:
    return current_app.extensions["dealscope"]["aggregator"]


def get_auth_service() -> AuthService:
    return current_app.extensions["dealscope"]["auth"]


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _run_search():
    query = (request.args.get('q') or '').strip()
    if not query:
        raise APIError('query param q required', 400)

    logger.info(f"Searching for products: {query}")
    result = get_aggregator().aggregate(query)
    return jsonify(result.to_dict())


@api_bp.route('/search', methods=['GET'])
def search_products():
    """
    Search every configured product source.

    Query string: ``q`` (required)

    Returns:
    {
        "query": "phone",
        "results": [
            {"title": ..., "price": 1299.0, "link": ..., "thumbnail": ...,
             "source": "flipkart", "raw": {...}},
            ...
        ]
    }
    """
    if current_app.config["DEALSCOPE_CONFIG"].require_auth_for_search:
        return require_auth(_run_search)()
    return _run_search()


@api_bp.route('/register', methods=['POST'])
def register():
    """
    Create an account.

    Expected JSON:
    {
        "name": "Asha",          (optional)
        "email": "asha@example.com",
        "password": "..."
    }

    Returns:
    {
        "token": "...",
        "user": {"id": 1718000000000, "name": "Asha", "email": "asha@example.com"}
    }
    """
    try:
        payload = RegisterRequest(**_json_body())
    except ValidationError as e:
        logger.debug(f"Invalid registration body: {e.errors()}")
        raise APIError('email and password required', 400) from e

    session = get_auth_service().register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return jsonify(session)


@api_bp.route('/login', methods=['POST'])
def login():
    """
    Exchange email and password for a token.

    Returns the same shape as ``/api/register``; any mismatch is a 401.
    """
    try:
        payload = LoginRequest(**_json_body())
    except ValidationError as e:
        raise AuthError('invalid credentials') from e

    session = get_auth_service().login(email=payload.email, password=payload.password)
    return jsonify(session)


@api_bp.route('/me', methods=['GET'])
@require_auth
def me():
    """Claims of the token presented in the Authorization header."""
    return jsonify({'user': g.user})
