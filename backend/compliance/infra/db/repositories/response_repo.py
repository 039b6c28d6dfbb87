"""SQLAlchemy implementation of ResponseRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from compliance.domain.auditing.ports import ResponseRepository
from compliance.models.audit import AuditResponse


class SqlResponseRepository(ResponseRepository):
    """Persist and retrieve AuditResponse rows via SQLAlchemy.

    ``upsert`` relies on the ``(audit_id, question_id)`` unique
    constraint: a concurrent insert of the same pair fails at flush
    instead of producing a duplicate row.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert(
        self,
        *,
        audit_id: str,
        question_id: str,
        value: str | None,
        bool_value: bool | None,
        numeric_value: float | None,
        notes: str | None,
        flagged: bool,
        score: float,
        max_score: float,
        passed: bool | None,
    ) -> AuditResponse:
        response = self.get(audit_id, question_id)
        if response is None:
            response = AuditResponse(audit_id=audit_id, question_id=question_id)
            self._session.add(response)

        response.value = value
        response.bool_value = bool_value
        response.numeric_value = numeric_value
        response.notes = notes
        response.flagged = flagged
        response.score = score
        response.max_score = max_score
        response.passed = passed

        self._session.flush()
        return response

    def get(self, audit_id: str, question_id: str) -> AuditResponse | None:
        return (
            self._session.query(AuditResponse)
            .filter(
                AuditResponse.audit_id == audit_id,
                AuditResponse.question_id == question_id,
            )
            .first()
        )

    def list_for_audit(self, audit_id: str) -> list[AuditResponse]:
        return (
            self._session.query(AuditResponse)
            .filter(AuditResponse.audit_id == audit_id)
            .all()
        )
