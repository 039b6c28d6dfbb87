"""CreateTemplateUseCase: author a new audit template.

Business rules:
  1. The draft is validated on construction (name, passing score,
     weights, numeric bounds)
  2. Sections and questions are ordered by their position in the draft
  3. New templates start at version 1

The use case depends ONLY on domain ports, never on SQLAlchemy,
FastAPI, or any other infrastructure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliance.domain.auditing.models import TemplateDraft
from compliance.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


# ── Command (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateTemplateCommand:
    """Immutable value object describing the template to create."""

    organization_id: str
    draft: TemplateDraft


# ── Result (output) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateTemplateResult:
    template_id: str


# ── Use Case ─────────────────────────────────────────────────────────────


class CreateTemplateUseCase:
    """Persist a template with its sections and questions."""

    def execute(
        self, uow: UnitOfWork, cmd: CreateTemplateCommand
    ) -> CreateTemplateResult:
        with uow:
            template = uow.templates.create(
                organization_id=cmd.organization_id,
                draft=cmd.draft,
            )
            template_id = template.id
            uow.commit()

        logger.info(
            "Template %s created for organization %s (%d sections)",
            template_id,
            cmd.organization_id,
            len(cmd.draft.sections),
        )
        return CreateTemplateResult(template_id=template_id)
