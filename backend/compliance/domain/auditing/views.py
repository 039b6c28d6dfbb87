"""Read models handed back by the query use cases.

Built from ORM-like records while the Unit of Work is still open, so
callers never touch a detached session object.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .models import ordered


@dataclass(frozen=True)
class QuestionView:
    id: str
    text: str
    type: str
    order: int
    weight: float
    is_required: bool
    is_critical: bool
    description: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    target_value: float | None = None
    unit: str | None = None
    options: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, q: object) -> "QuestionView":
        return cls(
            id=q.id,
            text=q.text,
            type=q.type,
            order=q.order or 0,
            weight=q.weight,
            is_required=bool(q.is_required),
            is_critical=bool(q.is_critical),
            description=q.description,
            min_value=q.min_value,
            max_value=q.max_value,
            target_value=q.target_value,
            unit=q.unit,
            options=tuple(q.options or ()),
        )


@dataclass(frozen=True)
class SectionView:
    id: str
    title: str
    order: int
    weight: float
    questions: tuple[QuestionView, ...]
    description: str | None = None

    @classmethod
    def from_record(cls, s: object) -> "SectionView":
        return cls(
            id=s.id,
            title=s.title,
            order=s.order or 0,
            weight=s.weight,
            description=s.description,
            questions=tuple(QuestionView.from_record(q) for q in ordered(s.questions)),
        )


@dataclass(frozen=True)
class TemplateView:
    id: str
    name: str
    passing_score: float
    version: int
    sections: tuple[SectionView, ...]
    description: str | None = None
    category: str | None = None
    previous_version_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, t: object) -> "TemplateView":
        return cls(
            id=t.id,
            name=t.name,
            passing_score=t.passing_score,
            version=t.version or 1,
            description=t.description,
            category=t.category,
            previous_version_id=t.previous_version_id,
            created_at=t.created_at,
            updated_at=t.updated_at,
            sections=tuple(SectionView.from_record(s) for s in ordered(t.sections)),
        )


@dataclass(frozen=True)
class TemplateListItem:
    id: str
    name: str
    passing_score: float
    version: int
    section_count: int
    audit_count: int
    category: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ResponseView:
    question_id: str
    flagged: bool
    value: str | None = None
    bool_value: bool | None = None
    numeric_value: float | None = None
    notes: str | None = None
    score: float | None = None
    max_score: float | None = None
    passed: bool | None = None

    @classmethod
    def from_record(cls, r: object) -> "ResponseView":
        return cls(
            question_id=r.question_id,
            flagged=bool(r.flagged),
            value=r.value,
            bool_value=r.bool_value,
            numeric_value=r.numeric_value,
            notes=r.notes,
            score=r.score,
            max_score=r.max_score,
            passed=r.passed,
        )


@dataclass(frozen=True)
class AuditSummaryView:
    """Audit header fields without template structure or responses."""

    id: str
    template_id: str
    template_name: str
    site_id: str
    status: str
    auditor_id: str | None = None
    scheduled_for: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_score: float | None = None
    max_score: float | None = None
    percentage: float | None = None
    passed: bool | None = None
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, a: object) -> "AuditSummaryView":
        return cls(
            id=a.id,
            template_id=a.template_id,
            template_name=a.template.name if a.template is not None else "",
            site_id=a.site_id,
            status=a.status,
            auditor_id=a.auditor_id,
            scheduled_for=a.scheduled_for,
            started_at=a.started_at,
            completed_at=a.completed_at,
            total_score=a.total_score,
            max_score=a.max_score,
            percentage=a.percentage,
            passed=a.passed,
            created_at=a.created_at,
        )


@dataclass(frozen=True)
class AuditView:
    """Full audit: header, template structure and saved responses."""

    summary: AuditSummaryView
    template: TemplateView
    responses: tuple[ResponseView, ...]
    auditor_signature: str | None = None
    auditor_signed_at: datetime | None = None

    @classmethod
    def from_record(cls, a: object) -> "AuditView":
        return cls(
            summary=AuditSummaryView.from_record(a),
            template=TemplateView.from_record(a.template),
            responses=tuple(ResponseView.from_record(r) for r in a.responses),
            auditor_signature=a.auditor_signature,
            auditor_signed_at=a.auditor_signed_at,
        )
