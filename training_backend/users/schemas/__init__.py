"""
User schemas for API requests and responses.
"""

from training_backend.core.schemas import MessageSchema
from training_backend.users.schemas.auth import CSRFTokenSchema
from training_backend.users.schemas.auth import LoginResponseSchema
from training_backend.users.schemas.auth import LoginSchema
from training_backend.users.schemas.auth import PasswordChangeSchema
from training_backend.users.schemas.auth import UserSchema
from training_backend.users.schemas.auth import UserUpdateSchema

__all__ = [
    "CSRFTokenSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "MessageSchema",
    "PasswordChangeSchema",
    "UserSchema",
    "UserUpdateSchema",
]
