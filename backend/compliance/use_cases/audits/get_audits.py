"""Read-side audit use cases: fetch one audit, list audits with filters."""

from __future__ import annotations

from dataclasses import dataclass

from compliance.domain.auditing.models import AuditStatus
from compliance.domain.auditing.views import AuditSummaryView, AuditView
from compliance.domain.common.errors import ValidationError
from compliance.domain.common.uow import UnitOfWork

from ._resolve import resolve_audit


# ── Queries (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class GetAuditQuery:
    organization_id: str
    audit_id: str


@dataclass(frozen=True)
class ListAuditsQuery:
    """Optional filters are combined with AND."""

    organization_id: str
    status: str | None = None
    site_id: str | None = None
    template_id: str | None = None

    def __post_init__(self) -> None:
        if self.status is not None:
            try:
                AuditStatus(self.status)
            except ValueError:
                raise ValidationError(f"Unknown audit status: {self.status!r}") from None


# ── Results (output) ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GetAuditResult:
    audit: AuditView


@dataclass(frozen=True)
class ListAuditsResult:
    audits: tuple[AuditSummaryView, ...]


# ── Use Cases ────────────────────────────────────────────────────────────


class GetAuditUseCase:
    """Load an audit with its template structure and saved responses."""

    def execute(self, uow: UnitOfWork, query: GetAuditQuery) -> GetAuditResult:
        with uow:
            audit = resolve_audit(uow, query.organization_id, query.audit_id)
            view = AuditView.from_record(audit)

        return GetAuditResult(audit=view)


class ListAuditsUseCase:
    """List an organization's audits, newest first."""

    def execute(self, uow: UnitOfWork, query: ListAuditsQuery) -> ListAuditsResult:
        with uow:
            audits = uow.audits.list(
                query.organization_id,
                status=query.status,
                site_id=query.site_id,
                template_id=query.template_id,
            )
            views = tuple(AuditSummaryView.from_record(a) for a in audits)

        return ListAuditsResult(audits=views)
