"""
Base API class for auto-discovery of controllers.

All API controllers should inherit from BaseAPI to be automatically
registered with the NinjaExtraAPI instance.
"""


class BaseAPI:
    """
    Marker class for API controllers.

    Controllers inheriting from this class and exported from an app's
    ``api`` package are discovered by ``config.api``.

    Example:
        @api_controller("/projects", tags=["Projects"])
        class ProjectsController(BaseAPI):
            @http_get("/")
            def list_projects(self):
                ...
    """

    pass
