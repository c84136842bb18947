"""FastAPI routers and dependencies."""

from bindery.api.deps import get_component_factory, get_json_payload
from bindery.api.forms import router as forms_router
from bindery.api.templates import router as templates_router

__all__ = [
    "get_component_factory",
    "get_json_payload",
    "forms_router",
    "templates_router",
]
