"""
FastAPI router module for record validation.

Implements POST /records/validate: the write-path check a record-creation
handler performs before persisting. The request carries the template and the
raw attribute bag; the response carries the normalized bag, or a 400 with
every validation detail so a form can highlight each invalid field.

Response Contract:
- 200: { ok: true, data: {...normalized attribute bag...} }
- 400: { detail: { error: "Validation failed", details: [{field, message}] } }
- 422: template itself is invalid (see templates router)
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from recordforge.api.templates import load_template
from recordforge.models import RecordValidationSuccess
from recordforge.services.record_validation import validate_record


# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


class RecordValidateRequest(BaseModel):
    """Request body for record validation."""
    template: Dict[str, Any] = Field(
        ...,
        description="Template document the record must conform to"
    )
    data: Optional[Any] = Field(
        default=None,
        description="Raw attribute bag keyed by field id"
    )


@router.post("/validate", response_model=RecordValidationSuccess)
async def validate_record_data(request: RecordValidateRequest) -> RecordValidationSuccess:
    """
    Validate and normalize one record against its template.

    Args:
        request: Template document plus raw attribute bag.

    Returns:
        RecordValidationSuccess with the normalized attribute bag.

    Raises:
        HTTPException 400: With every validation detail when the record is invalid.
        HTTPException 422: If the template itself is invalid.
    """
    template = load_template(request.template)
    result = validate_record(template, request.data)

    if not result.ok:
        logger.info(
            f"Record rejected for template '{template.name}': "
            f"{len(result.details)} detail(s)"
        )
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Validation failed",
                "details": [d.model_dump() for d in result.details],
            },
        )

    return result
