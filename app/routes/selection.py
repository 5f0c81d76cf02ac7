"""
Selection analysis routes.
"""
import time

from fastapi import APIRouter, Depends, HTTPException, Request

from app.models.schemas import (
    QuickAnalysisResponse,
    SelectionAnalysisRequest,
    SelectionAnalysisResponse,
    SuccessResponse,
)
from app.models.selection import SelectionAnalysisConfig, SelectionAnalysisConfigUpdate
from app.services.selection_service import SelectionAnalysisService
from app.core.logger import log_request, log_response, log_error
from app.core.auth import verify_internal_secret
from app.core.limiter import limiter, ANALYSIS_LIMIT, CONFIG_LIMIT

router = APIRouter(dependencies=[Depends(verify_internal_secret)])


def get_selection_service(request: Request) -> SelectionAnalysisService:
    """Return the service instance created at startup."""
    return request.app.state.selection_service


@router.post("/analyze-selections", response_model=SelectionAnalysisResponse)
@limiter.limit(ANALYSIS_LIMIT)
async def analyze_selections(request: Request, req: SelectionAnalysisRequest):
    """
    Analyze how well a user's workout selections fit their profile.

    Returns status "unavailable" with a null analysis when analysis is
    disabled for this profile or could not be produced.
    """
    log_request("/analyze-selections")
    service = get_selection_service(request)
    started = time.perf_counter()

    analysis = await service.analyze_selections(req.profile, req.selections, req.context)
    status = "success" if analysis is not None else "unavailable"
    log_response("/analyze-selections", status, (time.perf_counter() - started) * 1000)
    return {"status": status, "analysis": analysis}


@router.post("/quick-analysis", response_model=QuickAnalysisResponse)
@limiter.limit(ANALYSIS_LIMIT)
async def quick_analysis(request: Request, req: SelectionAnalysisRequest):
    """Four-tier summary of the selection analysis with the top suggestion."""
    log_request("/quick-analysis")
    service = get_selection_service(request)
    started = time.perf_counter()

    summary = await service.get_quick_analysis(req.profile, req.selections, req.context)
    status = "success" if summary is not None else "unavailable"
    log_response("/quick-analysis", status, (time.perf_counter() - started) * 1000)
    return {"status": status, "summary": summary}


@router.get("/selection-config", response_model=SelectionAnalysisConfig)
@limiter.limit(CONFIG_LIMIT)
def get_selection_config(request: Request):
    """Current engine configuration."""
    log_request("/selection-config", method="GET")
    return get_selection_service(request).get_config()


@router.patch("/selection-config", response_model=SelectionAnalysisConfig)
@limiter.limit(CONFIG_LIMIT)
def update_selection_config(request: Request, req: SelectionAnalysisConfigUpdate):
    """Merge the given top-level config keys into the current config."""
    log_request("/selection-config", method="PATCH")

    try:
        return get_selection_service(request).update_config(req)
    except ValueError as e:
        log_error("Selection config update", e)
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/selection-cache", response_model=SuccessResponse)
@limiter.limit(CONFIG_LIMIT)
def clear_selection_cache(request: Request):
    """Drop every cached analysis."""
    log_request("/selection-cache", method="DELETE")
    get_selection_service(request).clear_cache()
    return {"status": "success"}
