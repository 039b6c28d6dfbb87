"""GetAuditStatsUseCase: dashboard figures for one organization."""

from __future__ import annotations

from dataclasses import dataclass

from compliance.domain.auditing.models import AuditStats
from compliance.domain.auditing.scoring import summarize_stats
from compliance.domain.common.uow import UnitOfWork


@dataclass(frozen=True)
class GetAuditStatsQuery:
    organization_id: str


class GetAuditStatsUseCase:
    def execute(self, uow: UnitOfWork, query: GetAuditStatsQuery) -> AuditStats:
        with uow:
            return summarize_stats(uow.audits.list(query.organization_id))
