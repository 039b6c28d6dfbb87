"""SQLAlchemy implementation of AuditRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session, selectinload

from compliance.domain.auditing.models import utcnow
from compliance.domain.auditing.ports import AuditRepository
from compliance.models.audit import Audit, AuditResponse
from compliance.models.audit_template import AuditTemplate, TemplateSection


class SqlAuditRepository(AuditRepository):
    """Persist and retrieve Audit rows via SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, *, organization_id: str, template_id: str, **fields) -> Audit:
        audit = Audit(organization_id=organization_id, template_id=template_id, **fields)
        self._session.add(audit)
        self._session.flush()  # assigns PK without committing
        return audit

    def get(self, organization_id: str, audit_id: str) -> Audit | None:
        return (
            self._session.query(Audit)
            .options(
                selectinload(Audit.template)
                .selectinload(AuditTemplate.sections)
                .selectinload(TemplateSection.questions),
                selectinload(Audit.responses).selectinload(AuditResponse.question),
            )
            .filter(Audit.id == audit_id, Audit.organization_id == organization_id)
            .first()
        )

    def list(
        self,
        organization_id: str,
        *,
        status: str | None = None,
        site_id: str | None = None,
        template_id: str | None = None,
    ) -> list[Audit]:
        query = (
            self._session.query(Audit)
            .options(selectinload(Audit.template))
            .filter(Audit.organization_id == organization_id)
        )
        if status:
            query = query.filter(Audit.status == status)
        if site_id:
            query = query.filter(Audit.site_id == site_id)
        if template_id:
            query = query.filter(Audit.template_id == template_id)
        return query.order_by(Audit.created_at.desc()).all()

    def update_status(self, audit_id: str, status: str, **fields) -> None:
        audit = self._session.get(Audit, audit_id)
        if audit is None:
            return

        audit.status = status
        for name, value in fields.items():
            setattr(audit, name, value)
        if status == "completed" and "completed_at" not in fields:
            audit.completed_at = utcnow()

        self._session.flush()

    def delete(self, audit: Audit) -> None:
        self._session.delete(audit)
        self._session.flush()
