"""Shared audit lookup helpers for the audit use cases.

Extracts the repeated prologue (load audit in the caller's organization,
find a question inside its template) into reusable functions.
"""

from __future__ import annotations

from compliance.domain.common.errors import EntityNotFoundError
from compliance.domain.common.uow import UnitOfWork


def resolve_audit(uow: UnitOfWork, organization_id: str, audit_id: str) -> object:
    """Load an audit scoped to *organization_id*.

    Raises:
        EntityNotFoundError: If the audit does not exist in that organization.
    """
    audit = uow.audits.get(organization_id, audit_id)
    if audit is None:
        raise EntityNotFoundError("Audit", audit_id)
    return audit


def find_question(template: object, question_id: str) -> object | None:
    """Return the question with *question_id* from any section of *template*."""
    for section in template.sections or []:
        for question in section.questions or []:
            if question.id == question_id:
                return question
    return None
