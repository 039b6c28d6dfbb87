"""Schemas for audits, responses and reports"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .template import TemplateResponse


# ================= Request Schemas =================

class StartAuditRequest(BaseModel):
    """Request body for starting an audit"""
    template_id: str
    site_id: str = Field(..., min_length=1)
    scheduled_for: Optional[datetime] = None


class SaveResponseRequest(BaseModel):
    """Answer payload; which field matters depends on the question type"""
    value: Optional[str] = None
    bool_value: Optional[bool] = None
    numeric_value: Optional[float] = None
    notes: Optional[str] = None
    flagged: bool = False


class CompleteAuditRequest(BaseModel):
    """Request body for completing an audit"""
    signature: Optional[str] = None


# ================= Result Schema =================

class OperationResultResponse(BaseModel):
    """Outcome of saving a response or completing an audit"""
    success: bool
    passed: Optional[bool] = None
    percentage: Optional[float] = None
    error: Optional[str] = None


# ================= Audit Schemas =================

class AuditSummaryResponse(BaseModel):
    id: str
    template_id: str
    template_name: str
    site_id: str
    auditor_id: Optional[str] = None
    status: str
    scheduled_for: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    total_score: Optional[float] = None
    max_score: Optional[float] = None
    percentage: Optional[float] = None
    passed: Optional[bool] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuditListResponse(BaseModel):
    audits: List[AuditSummaryResponse]
    total: int


class ResponseItem(BaseModel):
    question_id: str
    value: Optional[str] = None
    bool_value: Optional[bool] = None
    numeric_value: Optional[float] = None
    notes: Optional[str] = None
    flagged: bool
    score: Optional[float] = None
    max_score: Optional[float] = None
    passed: Optional[bool] = None

    class Config:
        from_attributes = True


class AuditDetailResponse(BaseModel):
    """Audit with template structure and saved responses"""
    audit: AuditSummaryResponse
    template: TemplateResponse
    responses: List[ResponseItem]
    auditor_signature: Optional[str] = None
    auditor_signed_at: Optional[datetime] = None


class StartAuditResponse(BaseModel):
    audit_id: str
    status: str


# ================= Report Schemas =================

class SectionScoreResponse(BaseModel):
    section_id: str
    title: str
    answered: int
    passed_count: int
    pass_rate: float
    score: float
    max_score: float
    percentage: float

    class Config:
        from_attributes = True


class FailedItemResponse(BaseModel):
    section_title: str
    question_id: str
    question_text: str
    flagged: bool
    is_critical: bool
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class AuditReportResponse(BaseModel):
    audit: AuditSummaryResponse
    passing_score: float
    auditor_signature: Optional[str] = None
    sections: List[SectionScoreResponse]
    failed_items: List[FailedItemResponse]


class AuditStatsResponse(BaseModel):
    total_audits: int
    completed_audits: int
    in_progress_audits: int
    average_score: float
    pass_rate: float

    class Config:
        from_attributes = True
