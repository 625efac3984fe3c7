"""
User API controllers.

- AuthController: Session login/logout and profile (/api/auth/)
"""

from training_backend.users.api.auth import AuthController

__all__ = [
    "AuthController",
]
