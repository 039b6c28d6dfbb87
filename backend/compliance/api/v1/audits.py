"""
API endpoints for audits.

- start / list / get / delete audits
- PUT /audits/{id}/responses/{question_id}: score and save one answer
- POST /audits/{id}/complete: aggregate and close the audit
- GET /audits/{id}/report, GET /audits/stats: reporting
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
import logging

from ...domain.common.errors import (
    EntityNotFoundError,
    ValidationError as DomainValidationError,
)
from ...infra.db.uow import SqlUnitOfWork
from ...schemas.audit import (
    AuditDetailResponse, AuditListResponse, AuditReportResponse, AuditStatsResponse,
    AuditSummaryResponse, CompleteAuditRequest, FailedItemResponse,
    OperationResultResponse, ResponseItem, SaveResponseRequest,
    SectionScoreResponse, StartAuditRequest, StartAuditResponse,
)
from ...schemas.template import TemplateResponse
from ...use_cases.audits._result import FailureKind, OperationResult
from ...use_cases.audits.complete_audit import CompleteAuditCommand, CompleteAuditUseCase
from ...use_cases.audits.delete_audit import DeleteAuditCommand, DeleteAuditUseCase
from ...use_cases.audits.get_audits import (
    GetAuditQuery, GetAuditUseCase, ListAuditsQuery, ListAuditsUseCase,
)
from ...use_cases.audits.get_report import GetAuditReportQuery, GetAuditReportUseCase
from ...use_cases.audits.get_stats import GetAuditStatsQuery, GetAuditStatsUseCase
from ...use_cases.audits.save_response import (
    SaveAuditResponseCommand, SaveAuditResponseUseCase,
)
from ...use_cases.audits.start_audit import StartAuditCommand, StartAuditUseCase
from ...wiring.bootstrap import (
    get_complete_audit_use_case,
    get_save_response_use_case,
    get_uow,
)
from ..deps import RequestContext, get_request_context

logger = logging.getLogger(__name__)
router = APIRouter()

_FAILURE_STATUS = {
    FailureKind.NOT_FOUND: 404,
    FailureKind.INVALID: 422,
    FailureKind.CONFLICT: 409,
    FailureKind.STORAGE: 500,
}


def _operation_response(result: OperationResult) -> JSONResponse:
    """Serialize an OperationResult; the HTTP status mirrors the failure kind."""
    body = OperationResultResponse(
        success=result.success,
        passed=result.passed,
        percentage=result.percentage,
        error=result.error,
    )
    status = 200 if result.success else _FAILURE_STATUS.get(result.failure_kind, 500)
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


# ================= Audit lifecycle =================

@router.get("", response_model=AuditListResponse)
async def list_audits(
    status: Optional[str] = Query(None, description="Filter by audit status"),
    site_id: Optional[str] = Query(None, description="Filter by site"),
    template_id: Optional[str] = Query(None, description="Filter by template"),
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """List audits of the organization, newest first."""
    try:
        query = ListAuditsQuery(
            organization_id=ctx.organization_id,
            status=status,
            site_id=site_id,
            template_id=template_id,
        )
    except DomainValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = ListAuditsUseCase().execute(uow, query)
    audits = [AuditSummaryResponse.model_validate(a) for a in result.audits]
    return AuditListResponse(audits=audits, total=len(audits))


@router.post("", response_model=StartAuditResponse, status_code=201)
async def start_audit(
    data: StartAuditRequest,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Start an audit of a site; the caller becomes the auditor."""
    try:
        result = StartAuditUseCase().execute(
            uow,
            StartAuditCommand(
                organization_id=ctx.organization_id,
                template_id=data.template_id,
                site_id=data.site_id,
                auditor_id=ctx.user_id,
                scheduled_for=data.scheduled_for,
            ),
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DomainValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return StartAuditResponse(audit_id=result.audit_id, status=result.status)


@router.get("/stats", response_model=AuditStatsResponse)
async def audit_stats(
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Dashboard statistics: counts, average score and pass rate of completed audits."""
    stats = GetAuditStatsUseCase().execute(
        uow, GetAuditStatsQuery(organization_id=ctx.organization_id)
    )
    return AuditStatsResponse.model_validate(stats)


@router.get("/{audit_id}", response_model=AuditDetailResponse)
async def get_audit(
    audit_id: str,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Get an audit with its template and saved responses."""
    try:
        result = GetAuditUseCase().execute(
            uow, GetAuditQuery(organization_id=ctx.organization_id, audit_id=audit_id)
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    audit = result.audit
    return AuditDetailResponse(
        audit=AuditSummaryResponse.model_validate(audit.summary),
        template=TemplateResponse.model_validate(audit.template),
        responses=[ResponseItem.model_validate(r) for r in audit.responses],
        auditor_signature=audit.auditor_signature,
        auditor_signed_at=audit.auditor_signed_at,
    )


@router.delete("/{audit_id}")
async def delete_audit(
    audit_id: str,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Delete an audit and its responses."""
    try:
        DeleteAuditUseCase().execute(
            uow, DeleteAuditCommand(organization_id=ctx.organization_id, audit_id=audit_id)
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"status": "deleted", "audit_id": audit_id}


# ================= Scoring =================

@router.put("/{audit_id}/responses/{question_id}", response_model=OperationResultResponse)
async def save_response(
    audit_id: str,
    question_id: str,
    data: SaveResponseRequest,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: SaveAuditResponseUseCase = Depends(get_save_response_use_case),
):
    """Score and save the answer to one question (overwrites any previous answer)."""
    result = use_case.execute(
        uow,
        SaveAuditResponseCommand(
            organization_id=ctx.organization_id,
            audit_id=audit_id,
            question_id=question_id,
            value=data.value,
            bool_value=data.bool_value,
            numeric_value=data.numeric_value,
            notes=data.notes,
            flagged=data.flagged,
        ),
    )
    return _operation_response(result)


@router.post("/{audit_id}/complete", response_model=OperationResultResponse)
async def complete_audit(
    audit_id: str,
    data: Optional[CompleteAuditRequest] = None,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
    use_case: CompleteAuditUseCase = Depends(get_complete_audit_use_case),
):
    """Compute the final score and pass/fail, and mark the audit completed."""
    result = use_case.execute(
        uow,
        CompleteAuditCommand(
            organization_id=ctx.organization_id,
            audit_id=audit_id,
            signature=data.signature if data else None,
        ),
    )
    return _operation_response(result)


@router.get("/{audit_id}/report", response_model=AuditReportResponse)
async def audit_report(
    audit_id: str,
    ctx: RequestContext = Depends(get_request_context),
    uow: SqlUnitOfWork = Depends(get_uow),
):
    """Section-by-section breakdown and failed items for an audit."""
    try:
        report = GetAuditReportUseCase().execute(
            uow, GetAuditReportQuery(organization_id=ctx.organization_id, audit_id=audit_id)
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return AuditReportResponse(
        audit=AuditSummaryResponse.model_validate(report.audit),
        passing_score=report.passing_score,
        auditor_signature=report.auditor_signature,
        sections=[SectionScoreResponse.model_validate(s) for s in report.sections],
        failed_items=[FailedItemResponse.model_validate(f) for f in report.failed_items],
    )
