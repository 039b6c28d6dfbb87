"""DeleteTemplateUseCase: remove a template that no audit uses."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.common.errors import EntityNotFoundError, ValidationError
from compliance.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteTemplateCommand:
    organization_id: str
    template_id: str


class DeleteTemplateUseCase:
    """Delete a template together with its sections and questions."""

    def execute(self, uow: UnitOfWork, cmd: DeleteTemplateCommand) -> None:
        with uow:
            template = uow.templates.get(cmd.organization_id, cmd.template_id)
            if template is None:
                raise EntityNotFoundError("Template", cmd.template_id)

            audit_count = uow.templates.count_audits(template.id)
            if audit_count > 0:
                raise ValidationError(
                    f"Template {cmd.template_id} is used by {audit_count} audit(s)"
                )

            uow.templates.delete(template)
            uow.commit()

        logger.info("Template %s deleted", cmd.template_id)
