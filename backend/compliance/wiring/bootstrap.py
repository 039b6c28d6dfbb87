"""Dependency injection bootstrap: the single place that binds ports to adapters.

Every factory function here can be used as a FastAPI ``Depends()`` target.
Routers never import concrete implementations directly; they depend on
the abstractions returned by these factories.

Example usage in a router::

    from compliance.wiring.bootstrap import get_uow

    @router.post("/audits/{audit_id}/complete")
    async def complete(audit_id: str, uow: SqlUnitOfWork = Depends(get_uow)):
        ...
"""

from __future__ import annotations

from typing import Iterator

from compliance.config import settings
from compliance.database import SessionLocal
from compliance.domain.auditing.models import ScoringPolicy
from compliance.infra.db.uow import SqlUnitOfWork
from compliance.use_cases.audits.complete_audit import CompleteAuditUseCase
from compliance.use_cases.audits.save_response import SaveAuditResponseUseCase


# ── Unit of Work ─────────────────────────────────────────────────────────


def get_uow() -> Iterator[SqlUnitOfWork]:
    """Yield a SqlUnitOfWork bound to SessionLocal.

    Designed for FastAPI Depends()::

        uow: SqlUnitOfWork = Depends(get_uow)
    """
    uow = SqlUnitOfWork(SessionLocal)
    yield uow


# ── Scoring ──────────────────────────────────────────────────────────────


def get_scoring_policy() -> ScoringPolicy:
    """Build the ScoringPolicy from application settings."""
    return ScoringPolicy(
        unanswered_passes=settings.unanswered_passes,
        critical_questions_override=settings.critical_questions_override,
    )


def get_save_response_use_case() -> SaveAuditResponseUseCase:
    return SaveAuditResponseUseCase(policy=get_scoring_policy())


def get_complete_audit_use_case() -> CompleteAuditUseCase:
    return CompleteAuditUseCase(policy=get_scoring_policy())
