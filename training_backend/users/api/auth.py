"""
Authentication API controller.
"""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth import login
from django.contrib.auth import logout
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpRequest
from django.middleware.csrf import get_token
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post
from ninja_extra import http_put

from training_backend.core.api import AllowAny
from training_backend.core.api import BaseAPI
from training_backend.core.exceptions import AccountDisabledError
from training_backend.core.exceptions import BadRequestError
from training_backend.core.exceptions import ErrorSchema
from training_backend.core.exceptions import InvalidCredentialsError
from training_backend.core.exceptions import NotAuthenticatedError
from training_backend.core.exceptions import ValidationError
from training_backend.users.models import User
from training_backend.users.schemas import CSRFTokenSchema
from training_backend.users.schemas import LoginResponseSchema
from training_backend.users.schemas import LoginSchema
from training_backend.users.schemas import MessageSchema
from training_backend.users.schemas import PasswordChangeSchema
from training_backend.users.schemas import UserSchema
from training_backend.users.schemas import UserUpdateSchema

logger = logging.getLogger(__name__)


@api_controller("/auth", tags=["Authentication"], permissions=[AllowAny])
class AuthController(BaseAPI):
    """Session authentication endpoints: login, logout, profile, password."""

    @http_get("/csrf", response=CSRFTokenSchema, url_name="auth_csrf")
    def get_csrf_token(self, request: HttpRequest):
        """Get a CSRF token for subsequent POST requests."""
        return CSRFTokenSchema(csrf_token=get_token(request))

    @http_post(
        "/login",
        response={200: LoginResponseSchema, 401: ErrorSchema, 400: ErrorSchema},
        url_name="auth_login",
    )
    def login_view(self, request: HttpRequest, data: LoginSchema):
        """Authenticate user with email and password."""
        if not data.email or not data.password:
            return BadRequestError("Email and password are required.").to_response()

        user = authenticate(request, username=data.email, password=data.password)

        if user is None:
            # ModelBackend rejects inactive users, tell them apart
            inactive = User.objects.filter(email__iexact=data.email, is_active=False).first()
            if inactive is not None and inactive.check_password(data.password):
                return AccountDisabledError().to_response()
            logger.info("Failed login attempt for %s", data.email)
            return InvalidCredentialsError().to_response()

        login(request, user)

        return 200, LoginResponseSchema(
            success=True,
            user=UserSchema.from_user(user),
            csrf_token=get_token(request),
        )

    @http_post("/logout", response={200: MessageSchema}, url_name="auth_logout")
    def logout_view(self, request: HttpRequest):
        """Logout the current user and clear session."""
        logout(request)
        return 200, MessageSchema(success=True, message="Logged out.")

    @http_get(
        "/me",
        response={200: UserSchema, 401: ErrorSchema},
        url_name="auth_me",
    )
    def me_view(self, request: HttpRequest):
        """Get the current authenticated user's information."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        return 200, UserSchema.from_user(request.user)

    @http_put(
        "/me",
        response={200: UserSchema, 401: ErrorSchema},
        url_name="auth_me_update",
    )
    def update_me_view(self, request: HttpRequest, data: UserUpdateSchema):
        """Update the current user's name."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        user = request.user
        if data.first_name is not None:
            user.first_name = data.first_name
        if data.last_name is not None:
            user.last_name = data.last_name.strip()
        user.save(update_fields=["first_name", "last_name"])

        return 200, UserSchema.from_user(user)

    @http_post(
        "/password-change",
        response={200: MessageSchema, 400: ErrorSchema, 401: ErrorSchema},
        url_name="auth_password_change",
    )
    def password_change_view(self, request: HttpRequest, data: PasswordChangeSchema):
        """Change password for authenticated user."""
        if not request.user.is_authenticated:
            return NotAuthenticatedError().to_response()

        user = request.user

        if not user.check_password(data.current_password):
            return BadRequestError("Current password is incorrect.").to_response()

        try:
            validate_password(data.new_password, user=user)
        except DjangoValidationError as e:
            return ValidationError(
                message=" ".join(e.messages),
                details={"password_errors": e.messages},
            ).to_response()

        user.set_password(data.new_password)
        user.save()

        login(request, user)

        return 200, MessageSchema(
            success=True,
            message="Password changed.",
        )
