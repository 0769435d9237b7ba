"""
Authoring-time template validation.

Template invariants live on the pydantic models (TemplateSpec and friends).
This module turns a raw template document into either a TemplateSpec or a
list of ValidationDetail entries, so configuration errors reach callers in
the same {field, message} shape as record validation errors.

Detail `field` values are dotted paths into the document, for example
"views.1.summary.metrics.0" for a metric missing its fieldId. Errors raised
by a model-level invariant point at the model that owns it.
"""

import logging
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from recordforge.models import TemplateSpec, ValidationDetail

# Configure module logger
logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _details_from_error(exc: ValidationError) -> List[ValidationDetail]:
    details = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err.get("loc", ()))
        message = err.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        details.append(ValidationDetail(field=path or "_", message=message))
    return details


def validate_template(payload: Any) -> Tuple[Optional[TemplateSpec], List[ValidationDetail]]:
    """
    Parse and check a template document.

    Args:
        payload: Decoded template document (mapping) or an existing TemplateSpec.

    Returns:
        (template, []) when valid, or (None, details) listing every problem.
    """
    if isinstance(payload, TemplateSpec):
        return payload, []

    if not isinstance(payload, dict):
        return None, [ValidationDetail(field="_", message="template must be an object")]

    try:
        template = TemplateSpec.model_validate(payload)
    except ValidationError as exc:
        details = _details_from_error(exc)
        logger.info(f"Template rejected with {len(details)} issue(s)")
        return None, details

    return template, []
