"""Request-level accessors for shared application state."""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..config import Settings
from ..store import Repositories


def get_templates(request: Request) -> Jinja2Templates:
    """Get templates from app state."""
    return request.app.state.templates


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    return request.app.state.settings


def get_repositories(request: Request) -> Repositories:
    """Build repositories around the application's store client."""
    return Repositories.from_client(request.app.state.store)
