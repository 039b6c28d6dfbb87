"""StartAuditUseCase: open an audit of a site against a template."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from compliance.domain.auditing.models import AuditStatus, utcnow
from compliance.domain.common.errors import EntityNotFoundError, ValidationError
from compliance.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartAuditCommand:
    organization_id: str
    template_id: str
    site_id: str
    auditor_id: str | None = None
    scheduled_for: datetime | None = None

    def __post_init__(self) -> None:
        if not self.site_id or not self.site_id.strip():
            raise ValidationError("site_id is required")


@dataclass(frozen=True)
class StartAuditResult:
    audit_id: str
    status: str


class StartAuditUseCase:
    """Create an in-progress audit; the template must belong to the organization."""

    def execute(self, uow: UnitOfWork, cmd: StartAuditCommand) -> StartAuditResult:
        with uow:
            template = uow.templates.get(cmd.organization_id, cmd.template_id)
            if template is None:
                raise EntityNotFoundError("Template", cmd.template_id)

            audit = uow.audits.create(
                organization_id=cmd.organization_id,
                template_id=template.id,
                site_id=cmd.site_id,
                auditor_id=cmd.auditor_id,
                status=AuditStatus.IN_PROGRESS.value,
                started_at=utcnow(),
                scheduled_for=cmd.scheduled_for,
            )
            audit_id = audit.id
            uow.commit()

        logger.info(
            "Audit %s started (template=%s, site=%s, auditor=%s)",
            audit_id,
            cmd.template_id,
            cmd.site_id,
            cmd.auditor_id,
        )
        return StartAuditResult(audit_id=audit_id, status=AuditStatus.IN_PROGRESS.value)
