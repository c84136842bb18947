"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The component factory bound to the app's settings
- JSON payload extraction from raw or form-encoded bodies
- Mapping of binding errors to HTTP errors
"""

import logging

from fastapi import HTTPException, Request, status

from bindery.core.factory import ComponentFactory
from bindery.interfaces.template import (
    BindingError,
    ExpressionSyntaxError,
    InputFormatError,
    MissingTemplateError,
    ResolutionError,
    StructuralMismatchError,
)

logger = logging.getLogger(__name__)

FORM_FIELD = "jsonData"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_component_factory(request: Request) -> ComponentFactory:
    """Dependency returning the factory created with the application."""
    return request.app.state.factory


async def get_json_payload(request: Request) -> str:
    """Dependency for reading the JSON input of a request.

    Accepts either a raw JSON body or a form with a ``jsonData`` field.

    Returns:
        The JSON text, not yet decoded.

    Raises:
        HTTPException: If the payload is missing or not text.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            value = form.get(FORM_FIELD)
            if value is None:
                logger.warning("Form submitted without jsonData")
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Error: Missing jsonData parameter in form",
                )
            text = value if isinstance(value, str) else (await value.read()).decode("utf-8")
        else:
            text = (await request.body()).decode("utf-8")

        if not text.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Error: Missing JSON data",
            )
        return text

    except HTTPException:
        raise
    except UnicodeDecodeError as e:
        logger.warning(f"Request body is not UTF-8: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Error: Request body must be UTF-8 text",
        ) from e


def binding_http_error(error: BindingError) -> HTTPException:
    """Map a binding failure to the HTTP error reported to clients."""
    match error:
        case InputFormatError():
            code = status.HTTP_400_BAD_REQUEST
        case MissingTemplateError():
            code = status.HTTP_500_INTERNAL_SERVER_ERROR
        case ResolutionError() | StructuralMismatchError() | ExpressionSyntaxError():
            code = status.HTTP_422_UNPROCESSABLE_ENTITY
        case _:
            code = status.HTTP_500_INTERNAL_SERVER_ERROR

    log = logger.error if code >= 500 else logger.warning
    log(f"{type(error).__name__}: {error}")
    return HTTPException(status_code=code, detail=f"Error: {error}")
