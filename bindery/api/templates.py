"""Template API routes.

Handles rendering input data into the configured template, schema
extraction and typed record generation.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import ValidationError

from bindery.api.deps import binding_http_error, get_component_factory, get_json_payload
from bindery.core.factory import ComponentFactory
from bindery.interfaces.template import BindingError
from bindery.strategies.template_engine import ExtractedSchema, decode_input
from bindery.strategies.template_engine.codegen import input_model, render_models_source

logger = logging.getLogger(__name__)

router = APIRouter(tags=["templates"])


def _require_schema(factory: ComponentFactory) -> ExtractedSchema:
    schema = factory.get_engine().extract()
    if schema is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Template declares no data-component",
        )
    return schema


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/render", response_class=HTMLResponse)
async def render_template(
    payload: str = Depends(get_json_payload),
    typed: bool = Query(
        default=False,
        description="Validate the input against the template's typed records first",
    ),
    factory: ComponentFactory = Depends(get_component_factory),
) -> HTMLResponse:
    """Bind input data into the configured template.

    Accepts raw JSON or a form with a ``jsonData`` field.

    Args:
        payload: The JSON input text.
        typed: When true, the input is validated into generated records
            before binding.
        factory: Component factory.

    Returns:
        The bound HTML document.

    Raises:
        HTTPException: 400 on invalid JSON, 422 on unresolvable templates
            or invalid typed input, 500 if the template is missing.
    """
    engine = factory.get_engine()
    try:
        data = decode_input(payload)
        if typed:
            schema = _require_schema(factory)
            data = input_model(schema).model_validate(data)
        html = engine.render(data)
        return HTMLResponse(content=html)

    except HTTPException:
        raise
    except ValidationError as e:
        logger.warning(f"Typed input rejected: {e.error_count()} error(s)")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
    except BindingError as e:
        raise binding_http_error(e) from e


@router.get("/schema")
async def get_schema(
    factory: ComponentFactory = Depends(get_component_factory),
) -> dict:
    """Return the schema of the data the configured template expects."""
    try:
        return _require_schema(factory).to_document()
    except HTTPException:
        raise
    except BindingError as e:
        raise binding_http_error(e) from e


@router.get("/schema/models", response_class=PlainTextResponse)
async def get_schema_models(
    factory: ComponentFactory = Depends(get_component_factory),
) -> PlainTextResponse:
    """Return Python source for typed records matching the template."""
    try:
        source = render_models_source(_require_schema(factory))
        return PlainTextResponse(content=source, media_type="text/x-python")
    except HTTPException:
        raise
    except BindingError as e:
        raise binding_http_error(e) from e
