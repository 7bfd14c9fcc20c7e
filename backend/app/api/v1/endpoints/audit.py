"""
Audit API endpoints.
"""
from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.schemas.audit_request import AuditRequest
from app.schemas.audit_result import AuditResponse
from app.services.audit_runner import AuditRunner

router = APIRouter(tags=["Audit"])


@router.post("/run-audit", response_model=AuditResponse)
async def run_audit(request: AuditRequest, app_settings: Settings = Depends(get_settings)):
    """Score a site from PageSpeed Insights and, when configured, SerpApi."""
    runner = AuditRunner(app_settings)
    return await runner.run(request.siteUrl, request.keyword, request.location)
