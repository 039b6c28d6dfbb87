"""CompleteAuditUseCase: aggregate responses into the audit verdict.

Business rules:
  1. The audit must exist in the caller's organization
  2. draft / in_progress / completed may move to completed; completing
     again recomputes from the stored responses and overwrites the
     previous aggregate
  3. total / max are sums over the stored responses; percentage is 0
     when max is 0
  4. passed = percentage >= template.passing_score and no critical
     failure (a failed response that was flagged)
  5. The auditor signature and its timestamp are stored when supplied
  6. Failures come back as OperationResult, never as exceptions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.auditing.models import (
    AuditStatus,
    ResponseOutcome,
    ScoringPolicy,
    utcnow,
    validate_transition,
)
from compliance.domain.auditing.scoring import summarize_audit
from compliance.domain.common.errors import EntityNotFoundError, InvalidTransitionError
from compliance.domain.common.uow import UnitOfWork

from ._resolve import resolve_audit
from ._result import FailureKind, OperationResult

logger = logging.getLogger(__name__)


# ── Command (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CompleteAuditCommand:
    organization_id: str
    audit_id: str
    signature: str | None = None


# ── Helpers ──────────────────────────────────────────────────────────────


def _outcome(response: object) -> ResponseOutcome:
    question = getattr(response, "question", None)
    return ResponseOutcome(
        score=response.score,
        max_score=response.max_score,
        passed=response.passed,
        flagged=bool(response.flagged),
        is_critical=bool(getattr(question, "is_critical", False)),
    )


# ── Use Case ─────────────────────────────────────────────────────────────


class CompleteAuditUseCase:
    """Compute totals, percentage and pass/fail, and close the audit."""

    def __init__(self, policy: ScoringPolicy | None = None) -> None:
        self._policy = policy or ScoringPolicy()

    def execute(self, uow: UnitOfWork, cmd: CompleteAuditCommand) -> OperationResult:
        with uow:
            try:
                audit = resolve_audit(uow, cmd.organization_id, cmd.audit_id)
                validate_transition(AuditStatus(audit.status), AuditStatus.COMPLETED)

                summary = summarize_audit(
                    (_outcome(r) for r in audit.responses),
                    audit.template.passing_score,
                    self._policy,
                )

                now = utcnow()
                fields = dict(
                    completed_at=now,
                    total_score=summary.total_score,
                    max_score=summary.max_score,
                    percentage=summary.percentage,
                    passed=summary.passed,
                )
                if cmd.signature:
                    fields["auditor_signature"] = cmd.signature
                    fields["auditor_signed_at"] = now

                uow.audits.update_status(audit.id, AuditStatus.COMPLETED.value, **fields)
                uow.commit()
            except EntityNotFoundError:
                logger.warning("Complete audit: audit %s not found", cmd.audit_id)
                return OperationResult.failure("Audit not found", FailureKind.NOT_FOUND)
            except InvalidTransitionError as e:
                logger.warning("Complete audit %s refused: %s", cmd.audit_id, e)
                return OperationResult.failure(str(e), FailureKind.CONFLICT)
            except Exception:
                logger.exception("Failed to complete audit %s", cmd.audit_id)
                uow.rollback()
                return OperationResult.failure("Failed to complete audit", FailureKind.STORAGE)

        logger.info(
            "Audit %s completed: %.2f/%.2f (%.1f%%), passed=%s%s",
            cmd.audit_id,
            summary.total_score,
            summary.max_score,
            summary.percentage,
            summary.passed,
            " [critical failure]" if summary.has_critical_failure else "",
        )
        return OperationResult(
            success=True,
            passed=summary.passed,
            percentage=summary.percentage,
        )
