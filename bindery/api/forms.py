"""Saved input API routes.

Handles saving form inputs, listing them and fetching them back for
rendering.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response

from bindery.api.deps import binding_http_error, get_component_factory
from bindery.api.schemas import FormListResponse, SaveFormResponse
from bindery.core.factory import ComponentFactory
from bindery.interfaces.form_store import FormNotFoundError, InvalidFormNameError
from bindery.interfaces.template import BindingError, InputFormatError
from bindery.strategies.template_engine import decode_input

logger = logging.getLogger(__name__)

router = APIRouter(tags=["forms"])


@router.get("/index", response_class=HTMLResponse)
async def index(
    factory: ComponentFactory = Depends(get_component_factory),
) -> HTMLResponse:
    """List saved inputs as an HTML page.

    The page is itself a bindery template: the file list is a collection
    and the empty-state message a toggle.
    """
    names = factory.get_form_store().list_names()
    data = {
        "showList": bool(names),
        "showEmpty": not names,
        "count": str(len(names)),
        "files": [{"name": name} for name in names],
    }
    try:
        html = factory.get_index_engine().render(data)
    except BindingError as e:
        raise binding_http_error(e) from e
    return HTMLResponse(content=html)


@router.get("/forms", response_model=FormListResponse)
async def list_forms(
    factory: ComponentFactory = Depends(get_component_factory),
) -> FormListResponse:
    """List saved inputs as JSON."""
    names = factory.get_form_store().list_names()
    return FormListResponse(forms=names, total=len(names))


@router.get("/forms/{filename}")
async def get_form(
    filename: str,
    factory: ComponentFactory = Depends(get_component_factory),
) -> Response:
    """Return a saved input.

    Args:
        filename: Stored name, or ``latest`` for the most recent input.
        factory: Component factory.

    Raises:
        HTTPException: 400 for invalid names, 404 if not found, 500 if the
            stored file is not valid JSON.
    """
    try:
        content = factory.get_form_store().load(filename)
        decode_input(content)
        return Response(content=content, media_type="application/json")

    except InvalidFormNameError as e:
        logger.warning(f"Rejected form name: {filename}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Error: Invalid filename",
        ) from e
    except FormNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Error: {e}",
        ) from e
    except InputFormatError as e:
        logger.error(f"Stored form {filename} is not valid JSON: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error reading file: {e}",
        ) from e


@router.post("/save", response_model=SaveFormResponse)
async def save_form(
    request: Request,
    factory: ComponentFactory = Depends(get_component_factory),
) -> SaveFormResponse:
    """Validate and store a JSON input under a random name."""
    try:
        content = (await request.body()).decode("utf-8")
        decode_input(content)
        filename = factory.get_form_store().save(content)
        return SaveFormResponse(
            filename=filename,
            message=f"Form data saved successfully as {filename}",
        )

    except (InputFormatError, UnicodeDecodeError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Error: Invalid JSON format - {e}",
        ) from e
    except OSError as e:
        logger.error(f"Error saving form data: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error saving form data: {e}",
        ) from e
