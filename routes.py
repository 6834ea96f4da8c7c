import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from models import AuditRequest, SuggestCompetitorsRequest
from analyzer.pipeline import AuditFailedError, AuditInputError, BrandAuditor

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


def get_auditor(request: Request) -> BrandAuditor:
    """The BrandAuditor built at startup (overridden in tests)."""
    auditor = getattr(request.app.state, "auditor", None)
    if auditor is None:
        raise HTTPException(status_code=503, detail="Audit service is not ready")
    return auditor


@router.get("/")
async def root():
    return {
        "service": "Brand Audit",
        "status": "running",
        "endpoints": {
            "suggest_competitors": "/api/suggest-competitors (POST)",
            "audit": "/api/audit (POST)",
        },
    }


@router.get("/health")
async def health_check():
    return {"status": "healthy"}


@router.post("/api/suggest-competitors")
async def suggest_competitors(
    request: SuggestCompetitorsRequest, auditor: BrandAuditor = Depends(get_auditor)
):
    """
    Suggests up to 3 direct competitors for a company, based on its homepage.

    Returns:
        {"competitors": [{"name", "url", "reason"}]}
    """
    try:
        competitors = await auditor.suggest_competitors(request.company_name, request.company_url)
    except AuditInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"competitors": [c.model_dump(by_alias=True) for c in competitors]}


@router.post("/api/audit")
async def audit(request: AuditRequest, auditor: BrandAuditor = Depends(get_auditor)):
    """
    Runs the competitive brand audit for a company against its competitors.

    Returns the differentiation score, verdict, overlaps, standouts, takeaways,
    comparison chart, screenshots (when capture is enabled) and per-brand
    first impressions keyed by brand name.
    """
    try:
        report = await auditor.run_audit(request)
    except AuditInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuditFailedError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return report.to_response()
