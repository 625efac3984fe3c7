from training_backend.core.api.base import BaseAPI
from training_backend.core.api.permissions import AllowAny
from training_backend.core.api.permissions import IsAuthenticated

__all__ = ["BaseAPI", "IsAuthenticated", "AllowAny"]
