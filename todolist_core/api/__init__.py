"""Todo API endpoints for todolist-core.

This module provides the api blueprint that aggregates all owner-scoped
resources (currently todos). It is registered in main.py under
settings.api_prefix and is the single place where authentication is
enforced for them.

Request interceptors run in this order for every todo endpoint:
1. authenticate (before_request below) - resolves g.user_id from the bearer token
2. @validate_request - parses and validates the JSON body
3. the handler itself
"""

from flask import Blueprint, request

from ..auth.decorators import _authenticate_request
from . import todos

api_bp = Blueprint("api", __name__)


# ============================================================================
# Authentication Middleware (API-level)
# ============================================================================


@api_bp.before_request
def authenticate():
    """
    Require authentication for all endpoints in this blueprint.

    CORS preflight requests carry no credentials and are let through so
    flask-cors can answer them.

    Raises:
        AuthenticationError: If no valid bearer token is provided
    """
    if request.method == "OPTIONS":
        return
    _authenticate_request()


api_bp.register_blueprint(todos.todos_bp)

__all__ = ["api_bp"]
