"""DeleteAuditUseCase: remove an audit and its responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.common.uow import UnitOfWork

from ._resolve import resolve_audit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteAuditCommand:
    organization_id: str
    audit_id: str


class DeleteAuditUseCase:
    def execute(self, uow: UnitOfWork, cmd: DeleteAuditCommand) -> None:
        with uow:
            audit = resolve_audit(uow, cmd.organization_id, cmd.audit_id)
            uow.audits.delete(audit)
            uow.commit()

        logger.info("Audit %s deleted", cmd.audit_id)
