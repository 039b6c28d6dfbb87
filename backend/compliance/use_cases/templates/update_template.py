"""UpdateTemplateUseCase: edit a template without rewriting audit history.

Business rules:
  1. The template must exist in the caller's organization
  2. If no audit references the template, its content is replaced in
     place and the version is incremented
  3. If any audit references it, the questions those audits were scored
     against must stay intact: a new template row is created with
     version + 1 and ``previous_version_id`` pointing at the old row,
     which is left untouched
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.auditing.models import TemplateDraft
from compliance.domain.common.errors import EntityNotFoundError
from compliance.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateTemplateCommand:
    organization_id: str
    template_id: str
    draft: TemplateDraft


@dataclass(frozen=True)
class UpdateTemplateResult:
    template_id: str  # differs from the command's id when a new version was created
    version: int
    new_version_created: bool


class UpdateTemplateUseCase:
    """Apply a template edit in place or as a new version."""

    def execute(
        self, uow: UnitOfWork, cmd: UpdateTemplateCommand
    ) -> UpdateTemplateResult:
        with uow:
            template = uow.templates.get(cmd.organization_id, cmd.template_id)
            if template is None:
                raise EntityNotFoundError("Template", cmd.template_id)

            if uow.templates.count_audits(template.id) > 0:
                updated = uow.templates.create(
                    organization_id=cmd.organization_id,
                    draft=cmd.draft,
                    version=(template.version or 1) + 1,
                    previous_version_id=template.id,
                )
                created = True
            else:
                updated = uow.templates.replace_contents(template, cmd.draft)
                created = False

            result = UpdateTemplateResult(
                template_id=updated.id,
                version=updated.version,
                new_version_created=created,
            )
            uow.commit()

        if created:
            logger.info(
                "Template %s is in use; saved edit as new version %d (%s)",
                cmd.template_id,
                result.version,
                result.template_id,
            )
        else:
            logger.info(
                "Template %s updated in place (version %d)",
                cmd.template_id,
                result.version,
            )
        return result
