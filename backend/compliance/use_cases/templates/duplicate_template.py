"""DuplicateTemplateUseCase: copy a template as a fresh version-1 template."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.auditing.models import TemplateDraft
from compliance.domain.common.errors import EntityNotFoundError
from compliance.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicateTemplateCommand:
    organization_id: str
    template_id: str


@dataclass(frozen=True)
class DuplicateTemplateResult:
    template_id: str


class DuplicateTemplateUseCase:
    """Copy sections and questions into a new template named "<name> (Copy)"."""

    def execute(
        self, uow: UnitOfWork, cmd: DuplicateTemplateCommand
    ) -> DuplicateTemplateResult:
        with uow:
            original = uow.templates.get(cmd.organization_id, cmd.template_id)
            if original is None:
                raise EntityNotFoundError("Template", cmd.template_id)

            draft = TemplateDraft.from_record(original, name=f"{original.name} (Copy)")
            copy = uow.templates.create(organization_id=cmd.organization_id, draft=draft)
            copy_id = copy.id
            uow.commit()

        logger.info("Template %s duplicated as %s", cmd.template_id, copy_id)
        return DuplicateTemplateResult(template_id=copy_id)
