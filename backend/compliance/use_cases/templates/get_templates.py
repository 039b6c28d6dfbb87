"""Read-side template use cases: fetch one template, list all templates."""

from __future__ import annotations

from dataclasses import dataclass

from compliance.domain.auditing.views import TemplateListItem, TemplateView
from compliance.domain.common.errors import EntityNotFoundError
from compliance.domain.common.uow import UnitOfWork


# ── Queries (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class GetTemplateQuery:
    organization_id: str
    template_id: str


@dataclass(frozen=True)
class ListTemplatesQuery:
    organization_id: str


# ── Results (output) ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GetTemplateResult:
    template: TemplateView


@dataclass(frozen=True)
class ListTemplatesResult:
    templates: tuple[TemplateListItem, ...]


# ── Use Cases ────────────────────────────────────────────────────────────


class GetTemplateUseCase:
    """Load a template with its ordered sections and questions."""

    def execute(self, uow: UnitOfWork, query: GetTemplateQuery) -> GetTemplateResult:
        with uow:
            template = uow.templates.get(query.organization_id, query.template_id)
            if template is None:
                raise EntityNotFoundError("Template", query.template_id)
            view = TemplateView.from_record(template)

        return GetTemplateResult(template=view)


class ListTemplatesUseCase:
    """List an organization's templates, most recently updated first."""

    def execute(
        self, uow: UnitOfWork, query: ListTemplatesQuery
    ) -> ListTemplatesResult:
        with uow:
            rows = uow.templates.list_with_counts(query.organization_id)
            items = tuple(
                TemplateListItem(
                    id=t.id,
                    name=t.name,
                    passing_score=t.passing_score,
                    version=t.version or 1,
                    section_count=section_count,
                    audit_count=audit_count,
                    category=t.category,
                    updated_at=t.updated_at,
                )
                for t, section_count, audit_count in rows
            )

        return ListTemplatesResult(templates=items)
