"""Advisory safety analysis for a package name/description pair."""
from fastapi import APIRouter, Depends, HTTPException, status

from autostore.core.security import get_current_account
from autostore.interfaces.http.deps import get_safety_advisor
from autostore.modules.advisory import SafetyAdvisor
from autostore.schemas import AnalysisRequest, ErrorResponse, SafetyReportResponse, TokenData

router = APIRouter()


@router.post(
    "",
    response_model=SafetyReportResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Run the advisory safety report (not stored)",
)
async def analyze_package(
    payload: AnalysisRequest,
    _: TokenData = Depends(get_current_account),
    advisor: SafetyAdvisor = Depends(get_safety_advisor),
) -> SafetyReportResponse:
    report = await advisor.analyze(payload.name, payload.description)
    if report is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Analysis unavailable")
    return SafetyReportResponse(
        security_score=report.security_score,
        compatibility=report.compatibility,
        recommendations=list(report.recommendations),
        vulnerabilities_found=report.vulnerabilities_found,
    )
