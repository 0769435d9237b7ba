"""
FastAPI router module for template authoring checks.

Implements POST /templates/validate, which runs every authoring-time
invariant (unique field and view ids, select options, metric fieldId rules,
single default view, field references) against a template document.

The service is stateless: templates are not stored, only checked. The
shared `load_template` helper is also used by the record and view routers
so every endpoint rejects a bad template the same way.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, Field

from recordforge.models import TemplateSpec, ViewSpec
from recordforge.services.template_validation import validate_template
from recordforge.services.view_runtime import get_default_view


# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Local Pydantic Models for API Responses
# =============================================================================

class TemplateValidateResponse(BaseModel):
    """Response model for a template that passed every check."""
    ok: bool = Field(default=True)
    template: TemplateSpec = Field(
        ...,
        description="Normalized template with defaults applied"
    )
    defaultViewId: str = Field(
        ...,
        description="View shown first: the one marked default, else the first view"
    )


# =============================================================================
# Shared Helpers
# =============================================================================

def load_template(payload: Any) -> TemplateSpec:
    """
    Parse a template document or raise HTTP 422 with validation details.

    Raises:
        HTTPException 422: If the template violates any authoring invariant.
    """
    template, details = validate_template(payload)
    if template is None:
        raise HTTPException(
            status_code=422,
            detail={
                "error": "Invalid template",
                "details": [d.model_dump() for d in details],
            },
        )
    return template


def find_view(template: TemplateSpec, view_id: str) -> ViewSpec:
    """
    Look up a view by id.

    Raises:
        HTTPException 404: If the template has no view with this id.
    """
    view = template.get_view(view_id)
    if view is None:
        raise HTTPException(
            status_code=404,
            detail=f"View '{view_id}' not found in template '{template.name}'",
        )
    return view


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/validate", response_model=TemplateValidateResponse)
async def validate_template_document(
    payload: Dict[str, Any] = Body(..., description="Raw template document"),
) -> TemplateValidateResponse:
    """
    Check a template document against every authoring-time invariant.

    Returns:
        TemplateValidateResponse with the normalized template.

    Raises:
        HTTPException 422: With {error, details} listing every problem.
    """
    template = load_template(payload)
    logger.info(
        f"Template '{template.name}' valid: {len(template.schema_.fields)} field(s), "
        f"{len(template.views)} view(s)"
    )
    return TemplateValidateResponse(
        template=template,
        defaultViewId=get_default_view(template).id,
    )
