"""SaveAuditResponseUseCase: score and store one answer.

Business rules:
  1. The audit must exist in the caller's organization
  2. The question must belong to the audit's template
  3. score / max_score / passed are recomputed from the full input on
     every save; max_score is the question's weight at save time
  4. The response is upserted on (audit_id, question_id): a second save
     overwrites every field of the first, nothing accumulates
  5. Failures come back as OperationResult, never as exceptions

The use case depends ONLY on domain ports, never on SQLAlchemy,
FastAPI, or any other infrastructure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.auditing.models import Answer, QuestionSpec, ScoringPolicy
from compliance.domain.auditing.scoring import score_response
from compliance.domain.common.errors import (
    EntityNotFoundError,
    ValidationError,
)
from compliance.domain.common.uow import UnitOfWork

from ._resolve import find_question, resolve_audit
from ._result import FailureKind, OperationResult

logger = logging.getLogger(__name__)


# ── Command (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class SaveAuditResponseCommand:
    """Immutable value object describing the submitted answer."""

    organization_id: str
    audit_id: str
    question_id: str
    value: str | None = None
    bool_value: bool | None = None
    numeric_value: float | None = None
    notes: str | None = None
    flagged: bool = False


# ── Use Case ─────────────────────────────────────────────────────────────


class SaveAuditResponseUseCase:
    """Score an answer against its question and upsert the response."""

    def __init__(self, policy: ScoringPolicy | None = None) -> None:
        self._policy = policy or ScoringPolicy()

    def execute(
        self, uow: UnitOfWork, cmd: SaveAuditResponseCommand
    ) -> OperationResult:
        with uow:
            try:
                audit = resolve_audit(uow, cmd.organization_id, cmd.audit_id)
                question = find_question(audit.template, cmd.question_id)
                if question is None:
                    raise EntityNotFoundError("Question", cmd.question_id)

                scored = score_response(
                    QuestionSpec.from_record(question),
                    Answer(
                        value=cmd.value,
                        bool_value=cmd.bool_value,
                        numeric_value=cmd.numeric_value,
                    ),
                    self._policy,
                )

                uow.responses.upsert(
                    audit_id=audit.id,
                    question_id=question.id,
                    value=cmd.value,
                    bool_value=cmd.bool_value,
                    numeric_value=cmd.numeric_value,
                    notes=cmd.notes,
                    flagged=bool(cmd.flagged),
                    score=scored.score,
                    max_score=scored.max_score,
                    passed=scored.passed,
                )
                uow.commit()
            except EntityNotFoundError as e:
                logger.warning(
                    "Save response: %s not found (audit %s, question %s)",
                    e.entity.lower(),
                    cmd.audit_id,
                    cmd.question_id,
                )
                return OperationResult.failure(f"{e.entity} not found", FailureKind.NOT_FOUND)
            except ValidationError as e:
                return OperationResult.failure(str(e), FailureKind.INVALID)
            except Exception:
                logger.exception(
                    "Failed to save response for audit %s question %s",
                    cmd.audit_id,
                    cmd.question_id,
                )
                uow.rollback()
                return OperationResult.failure("Failed to save response", FailureKind.STORAGE)

        logger.debug(
            "Audit %s question %s scored %.2f/%.2f (passed=%s)",
            cmd.audit_id,
            cmd.question_id,
            scored.score,
            scored.max_score,
            scored.passed,
        )
        return OperationResult(success=True, passed=scored.passed)
