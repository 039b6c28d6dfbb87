"""SQLAlchemy implementation of TemplateRepository."""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from compliance.domain.auditing.models import TemplateDraft
from compliance.domain.auditing.ports import TemplateRepository
from compliance.models.audit import Audit
from compliance.models.audit_template import (
    AuditTemplate,
    TemplateQuestion,
    TemplateSection,
)

logger = logging.getLogger(__name__)


def _build_sections(draft: TemplateDraft) -> list[TemplateSection]:
    """Materialise draft sections/questions; ``order`` follows list position.

    This is a **pure function**: it builds transient ORM objects but
    never touches the session.
    """
    sections: list[TemplateSection] = []
    for s_index, section in enumerate(draft.sections):
        sections.append(
            TemplateSection(
                title=section.title,
                description=section.description,
                order=s_index,
                weight=section.weight,
                questions=[
                    TemplateQuestion(
                        text=q.text,
                        description=q.description,
                        type=q.type.value,
                        is_required=q.is_required,
                        is_critical=q.is_critical,
                        order=q_index,
                        weight=q.weight,
                        min_value=q.min_value,
                        max_value=q.max_value,
                        target_value=q.target_value,
                        unit=q.unit,
                        options=list(q.options),
                    )
                    for q_index, q in enumerate(section.questions)
                ],
            )
        )
    return sections


class SqlTemplateRepository(TemplateRepository):
    """Persist and retrieve AuditTemplate trees via SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(
        self,
        *,
        organization_id: str,
        draft: TemplateDraft,
        version: int = 1,
        previous_version_id: str | None = None,
    ) -> AuditTemplate:
        template = AuditTemplate(
            organization_id=organization_id,
            name=draft.name,
            description=draft.description,
            category=draft.category,
            passing_score=draft.passing_score,
            version=version,
            previous_version_id=previous_version_id,
            sections=_build_sections(draft),
        )
        self._session.add(template)
        self._session.flush()  # assigns ids without committing
        return template

    def get(self, organization_id: str, template_id: str) -> AuditTemplate | None:
        return (
            self._session.query(AuditTemplate)
            .options(
                selectinload(AuditTemplate.sections).selectinload(
                    TemplateSection.questions
                )
            )
            .filter(
                AuditTemplate.id == template_id,
                AuditTemplate.organization_id == organization_id,
            )
            .first()
        )

    def list_with_counts(
        self, organization_id: str
    ) -> list[tuple[AuditTemplate, int, int]]:
        section_counts = (
            self._session.query(
                TemplateSection.template_id,
                func.count(TemplateSection.id).label("n"),
            )
            .group_by(TemplateSection.template_id)
            .subquery()
        )
        audit_counts = (
            self._session.query(
                Audit.template_id,
                func.count(Audit.id).label("n"),
            )
            .group_by(Audit.template_id)
            .subquery()
        )
        rows = (
            self._session.query(
                AuditTemplate,
                func.coalesce(section_counts.c.n, 0),
                func.coalesce(audit_counts.c.n, 0),
            )
            .outerjoin(section_counts, section_counts.c.template_id == AuditTemplate.id)
            .outerjoin(audit_counts, audit_counts.c.template_id == AuditTemplate.id)
            .filter(AuditTemplate.organization_id == organization_id)
            .order_by(AuditTemplate.updated_at.desc(), AuditTemplate.name)
            .all()
        )
        return [(t, int(sections), int(audits)) for t, sections, audits in rows]

    def replace_contents(
        self, template: AuditTemplate, draft: TemplateDraft
    ) -> AuditTemplate:
        template.name = draft.name
        template.description = draft.description
        template.category = draft.category
        template.passing_score = draft.passing_score
        template.version = (template.version or 1) + 1
        # delete-orphan cascade removes the old sections and their questions
        template.sections = _build_sections(draft)
        self._session.flush()
        return template

    def count_audits(self, template_id: str) -> int:
        return (
            self._session.query(func.count(Audit.id))
            .filter(Audit.template_id == template_id)
            .scalar()
            or 0
        )

    def delete(self, template: AuditTemplate) -> None:
        self._session.delete(template)
        self._session.flush()
