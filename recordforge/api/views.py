"""
FastAPI router module for summary and chart view rendering.

Implements:
- POST /views/{view_id}/summary: metric cards and group-by breakdowns
- POST /views/{view_id}/chart: per-series values, grouped rows, time series

Requests are self-contained: the template, the collection's records, an
optional time range and an optional reference date. Nothing is fetched or
cached. The time range falls back to the view's defaultTimeRange and then
to the configured default preset; the reference date falls back to today.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from recordforge.api.templates import find_view, load_template
from recordforge.core.config import Settings
from recordforge.core.dependencies import SettingsDep
from recordforge.models import (
    ChartResult,
    ChartView,
    PresetTimeRange,
    StoredRecord,
    SummaryResult,
    SummaryView,
    TimeRange,
)
from recordforge.services.view_runtime import render_chart, render_summary


# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


class ViewRenderRequest(BaseModel):
    """Request body shared by the summary and chart endpoints."""
    template: Dict[str, Any] = Field(
        ...,
        description="Template document containing the view"
    )
    records: List[StoredRecord] = Field(
        default_factory=list,
        description="All records of the collection"
    )
    timeRange: Optional[TimeRange] = Field(
        default=None,
        description="Selected time range; falls back to the view default"
    )
    now: Optional[date] = Field(
        default=None,
        description="Reference date for presets; defaults to today"
    )


def _check_record_limit(request: ViewRenderRequest, limit: int) -> None:
    if len(request.records) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Too many records: {len(request.records)} exceeds limit of {limit}",
        )


def _resolve_request_range(
    request: ViewRenderRequest,
    view: Union[SummaryView, ChartView],
    settings: Settings,
) -> TimeRange:
    if request.timeRange is not None:
        return request.timeRange
    if view.defaultTimeRange is not None:
        return view.defaultTimeRange
    return PresetTimeRange(preset=settings.default_time_range)


@router.post("/{view_id}/summary", response_model=SummaryResult)
async def render_summary_view(
    view_id: str,
    request: ViewRenderRequest,
    settings: SettingsDep,
) -> SummaryResult:
    """
    Render a summary view over the supplied records.

    Raises:
        HTTPException 400: If the view is not a summary view.
        HTTPException 404: If the view does not exist.
        HTTPException 413: If too many records are supplied.
        HTTPException 422: If the template is invalid.
        HTTPException 500: If rendering fails unexpectedly.
    """
    _check_record_limit(request, settings.max_records_per_request)
    template = load_template(request.template)
    view = find_view(template, view_id)

    if not isinstance(view, SummaryView):
        raise HTTPException(
            status_code=400,
            detail=f"View '{view_id}' is a {view.type} view, not a summary view",
        )

    try:
        return render_summary(
            view,
            request.records,
            now=request.now or date.today(),
            time_range=_resolve_request_range(request, view, settings),
            schema=template.schema_,
            empty_key=settings.empty_group_key,
            currency_symbol=settings.currency_symbol,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error rendering summary view '{view_id}': {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error rendering summary view: {str(e)}",
        )


@router.post("/{view_id}/chart", response_model=ChartResult)
async def render_chart_view(
    view_id: str,
    request: ViewRenderRequest,
    settings: SettingsDep,
) -> ChartResult:
    """
    Render a chart view over the supplied records.

    Raises:
        HTTPException 400: If the view is not a chart view.
        HTTPException 404: If the view does not exist.
        HTTPException 413: If too many records are supplied.
        HTTPException 422: If the template is invalid.
        HTTPException 500: If rendering fails unexpectedly.
    """
    _check_record_limit(request, settings.max_records_per_request)
    template = load_template(request.template)
    view = find_view(template, view_id)

    if not isinstance(view, ChartView):
        raise HTTPException(
            status_code=400,
            detail=f"View '{view_id}' is a {view.type} view, not a chart view",
        )

    try:
        return render_chart(
            view,
            request.records,
            now=request.now or date.today(),
            time_range=_resolve_request_range(request, view, settings),
            schema=template.schema_,
            empty_key=settings.empty_group_key,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error rendering chart view '{view_id}': {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error rendering chart view: {str(e)}",
        )
