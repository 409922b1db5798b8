"""
Main API configuration for Django Ninja Extra.
All API controllers are automatically registered here.
"""

import importlib
import inspect
import logging

from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from academia.core.api.base import BaseAPI
from academia.core.exceptions import APIException

logger = logging.getLogger(__name__)

api = NinjaExtraAPI(
    title="Academia API",
    version="1.0.0",
    description="Backend API for the Academia project workflow",
    docs_url="/docs",
    openapi_url="/openapi.json",
)


@api.exception_handler(APIException)
def handle_api_exception(request: HttpRequest, exc: APIException):
    """Render service errors that controllers let through."""
    status, body = exc.to_response()
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.path, exc.message)
    return api.create_response(request, body.model_dump(), status=status)


def register_controllers_from_module(api_instance: NinjaExtraAPI, module_path: str) -> None:
    """
    Dynamically import and register API controllers from a module.

    Controllers must inherit from BaseAPI to be registered.
    """
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as exc:
        if exc.name != module_path:
            raise
        logger.debug("Module %s not found, skipping", module_path)
        return

    for attr_name in dir(module):
        attr = getattr(module, attr_name)
        if inspect.isclass(attr) and issubclass(attr, BaseAPI) and attr is not BaseAPI:
            logger.debug("Registering controller: %s.%s", module_path, attr_name)
            api_instance.register_controllers(attr)


# Register controllers from each local app
LOCAL_APPS = [
    "academia.users",
    "academia.projects",
    "academia.evaluations",
    "academia.notifications",
    "academia.messaging",
]

for app in LOCAL_APPS:
    register_controllers_from_module(api, f"{app}.api")
