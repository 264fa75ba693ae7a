"""Authentication module for todolist-core.

This module provides:
- Schema validation for auth operations
- JWT token generation and validation
- Password hashing and credential verification
- Authentication middleware for protected endpoints

Auth endpoints (mounted under the API prefix, default /api):
- POST /auth/register - Create account and return JWT token
- POST /auth/login - Authenticate and return JWT token
- POST /auth/logout - Stateless no-op, client discards token
- GET /auth/me - Get current user info
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
