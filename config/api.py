"""
Main API configuration for Django Ninja Extra.
All API controllers are automatically registered here.
"""

import importlib
import inspect
import logging

from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from training_backend.core.api.base import BaseAPI
from training_backend.core.exceptions import APIException

logger = logging.getLogger(__name__)

api = NinjaExtraAPI(
    title="Training Planner API",
    version="1.0.0",
    description="Backend API for projects, events, instructors and timeline views",
    docs_url="/docs",
    openapi_url="/openapi.json",
)


@api.exception_handler(APIException)
def api_exception_handler(request: HttpRequest, exc: APIException):
    """Render an APIException raised below a controller with the error schema."""
    logger.info(
        "%s %s failed with %s: %s",
        request.method,
        request.path,
        exc.code,
        exc.message,
    )
    status_code, body = exc.to_response()
    return api.create_response(request, body.model_dump(), status=status_code)


def register_controllers_from_module(api_instance: NinjaExtraAPI, module_path: str) -> None:
    """
    Dynamically import and register API controllers from a module.

    Controllers must inherit from BaseAPI to be registered.
    """
    try:
        module = importlib.import_module(module_path)
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if (
                inspect.isclass(attr)
                and issubclass(attr, BaseAPI)
                and attr is not BaseAPI
            ):
                logger.debug("Registering controller: %s.%s", module_path, attr_name)
                api_instance.register_controllers(attr)
    except ModuleNotFoundError:
        logger.debug("Module %s not found, skipping", module_path)
    except Exception:
        logger.exception("Error registering controllers from %s", module_path)


# Register controllers from each local app
LOCAL_APPS = [
    "training_backend.users",
    "training_backend.projects",
    "training_backend.timeline",
]

for app in LOCAL_APPS:
    register_controllers_from_module(api, f"{app}.api")
