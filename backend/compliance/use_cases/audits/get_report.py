"""GetAuditReportUseCase: printable audit report.

Combines the stored aggregate with a per-section breakdown and the list
of failed items.  Section figures are recomputed from the response store on
every call; the overall figures are the ones persisted at completion
(None for audits that were never completed).
"""

from __future__ import annotations

from dataclasses import dataclass

from compliance.domain.auditing.models import FailedItem, SectionScoreSummary
from compliance.domain.auditing.scoring import collect_failed_items, summarize_sections
from compliance.domain.auditing.views import AuditSummaryView
from compliance.domain.common.uow import UnitOfWork

from ._resolve import resolve_audit


@dataclass(frozen=True)
class GetAuditReportQuery:
    organization_id: str
    audit_id: str


@dataclass(frozen=True)
class AuditReport:
    audit: AuditSummaryView
    passing_score: float
    sections: tuple[SectionScoreSummary, ...]
    failed_items: tuple[FailedItem, ...]
    auditor_signature: str | None = None


class GetAuditReportUseCase:
    def execute(self, uow: UnitOfWork, query: GetAuditReportQuery) -> AuditReport:
        with uow:
            audit = resolve_audit(uow, query.organization_id, query.audit_id)
            sections = audit.template.sections
            responses = uow.responses.list_for_audit(audit.id)

            report = AuditReport(
                audit=AuditSummaryView.from_record(audit),
                passing_score=audit.template.passing_score,
                sections=tuple(summarize_sections(sections, responses)),
                failed_items=tuple(collect_failed_items(sections, responses)),
                auditor_signature=audit.auditor_signature,
            )

        return report
