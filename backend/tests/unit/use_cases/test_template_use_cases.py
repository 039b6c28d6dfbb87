"""Unit tests for the template use cases: pure in-memory, no infrastructure."""

import pytest

from compliance.domain.auditing.models import QuestionDraft, SectionDraft, TemplateDraft
from compliance.domain.common.errors import EntityNotFoundError, ValidationError
from compliance.use_cases.templates.create_template import (
    CreateTemplateCommand,
    CreateTemplateUseCase,
)
from compliance.use_cases.templates.delete_template import (
    DeleteTemplateCommand,
    DeleteTemplateUseCase,
)
from compliance.use_cases.templates.duplicate_template import (
    DuplicateTemplateCommand,
    DuplicateTemplateUseCase,
)
from compliance.use_cases.templates.get_templates import (
    GetTemplateQuery,
    GetTemplateUseCase,
    ListTemplatesQuery,
    ListTemplatesUseCase,
)
from compliance.use_cases.templates.update_template import (
    UpdateTemplateCommand,
    UpdateTemplateUseCase,
)

from tests.unit.auditing_fakes import FakeUnitOfWork, seed_audit


ORG = "org-acme"


# ── Helpers ──────────────────────────────────────────────────────────────


def _make_draft(name="Kitchen Daily", **overrides) -> TemplateDraft:
    defaults = dict(
        name=name,
        passing_score=80,
        category="food_safety",
        sections=(
            SectionDraft(
                title="Hygiene",
                questions=(
                    QuestionDraft(text="Hands washed?", type="yes_no"),
                    QuestionDraft(
                        text="Fridge temp",
                        type="numeric",
                        min_value=0,
                        max_value=5,
                        unit="°C",
                        weight=2,
                    ),
                ),
            ),
            SectionDraft(
                title="Storage",
                questions=(QuestionDraft(text="Labels dated?", type="pass_fail"),),
            ),
        ),
    )
    defaults.update(overrides)
    return TemplateDraft(**defaults)


def _create(uow, draft=None, org=ORG) -> str:
    return CreateTemplateUseCase().execute(
        uow, CreateTemplateCommand(organization_id=org, draft=draft or _make_draft())
    ).template_id


# ── Create / Get ─────────────────────────────────────────────────────────


class TestCreateAndGetTemplate:
    def test_created_template_round_trips_structure(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)

        view = GetTemplateUseCase().execute(
            uow, GetTemplateQuery(organization_id=ORG, template_id=template_id)
        ).template

        assert view.name == "Kitchen Daily"
        assert view.version == 1
        assert view.passing_score == 80
        assert [s.title for s in view.sections] == ["Hygiene", "Storage"]
        fridge = view.sections[0].questions[1]
        assert fridge.type == "numeric"
        assert fridge.order == 1
        assert (fridge.min_value, fridge.max_value, fridge.unit) == (0, 5, "°C")
        assert fridge.weight == 2
        assert uow.committed == 1

    def test_get_from_other_organization_is_not_found(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)

        with pytest.raises(EntityNotFoundError):
            GetTemplateUseCase().execute(
                uow, GetTemplateQuery(organization_id="org-globex", template_id=template_id)
            )


class TestListTemplates:
    def test_lists_only_own_templates_with_counts(self):
        uow = FakeUnitOfWork()
        mine = _create(uow)
        _create(uow, org="org-globex")
        seed_audit(uow, uow.templates.templates[mine])

        items = ListTemplatesUseCase().execute(
            uow, ListTemplatesQuery(organization_id=ORG)
        ).templates

        assert len(items) == 1
        assert items[0].id == mine
        assert items[0].section_count == 2
        assert items[0].audit_count == 1
        assert items[0].category == "food_safety"


# ── Update ───────────────────────────────────────────────────────────────


class TestUpdateTemplate:
    def test_unused_template_is_updated_in_place(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)

        result = UpdateTemplateUseCase().execute(
            uow,
            UpdateTemplateCommand(
                organization_id=ORG,
                template_id=template_id,
                draft=_make_draft(name="Kitchen v2", sections=()),
            ),
        )

        assert result.template_id == template_id
        assert result.version == 2
        assert result.new_version_created is False
        stored = uow.templates.templates[template_id]
        assert stored.name == "Kitchen v2"
        assert stored.sections == []
        assert len(uow.templates.templates) == 1

    def test_template_in_use_gets_new_version(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)
        original = uow.templates.templates[template_id]
        seed_audit(uow, original)

        result = UpdateTemplateUseCase().execute(
            uow,
            UpdateTemplateCommand(
                organization_id=ORG,
                template_id=template_id,
                draft=_make_draft(name="Kitchen v2"),
            ),
        )

        assert result.new_version_created is True
        assert result.template_id != template_id
        assert result.version == 2
        new = uow.templates.templates[result.template_id]
        assert new.previous_version_id == template_id
        assert new.name == "Kitchen v2"
        # Audit history still points at the untouched original
        assert original.name == "Kitchen Daily"
        assert original.version == 1
        assert len(original.sections) == 2

    def test_missing_template(self):
        with pytest.raises(EntityNotFoundError):
            UpdateTemplateUseCase().execute(
                FakeUnitOfWork(),
                UpdateTemplateCommand(
                    organization_id=ORG, template_id="missing", draft=_make_draft()
                ),
            )


# ── Duplicate ────────────────────────────────────────────────────────────


class TestDuplicateTemplate:
    def test_copy_is_a_fresh_template(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)
        uow.templates.templates[template_id].version = 4

        copy_id = DuplicateTemplateUseCase().execute(
            uow, DuplicateTemplateCommand(organization_id=ORG, template_id=template_id)
        ).template_id

        copy = uow.templates.templates[copy_id]
        assert copy_id != template_id
        assert copy.name == "Kitchen Daily (Copy)"
        assert copy.version == 1
        assert copy.previous_version_id is None
        assert [s.title for s in copy.sections] == ["Hygiene", "Storage"]
        assert [q.text for q in copy.sections[0].questions] == [
            "Hands washed?",
            "Fridge temp",
        ]

    def test_missing_template(self):
        with pytest.raises(EntityNotFoundError):
            DuplicateTemplateUseCase().execute(
                FakeUnitOfWork(),
                DuplicateTemplateCommand(organization_id=ORG, template_id="missing"),
            )


# ── Delete ───────────────────────────────────────────────────────────────


class TestDeleteTemplate:
    def test_unused_template_is_deleted(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)

        DeleteTemplateUseCase().execute(
            uow, DeleteTemplateCommand(organization_id=ORG, template_id=template_id)
        )

        assert template_id not in uow.templates.templates

    def test_template_in_use_is_refused(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)
        seed_audit(uow, uow.templates.templates[template_id])

        with pytest.raises(ValidationError, match="used by 1 audit"):
            DeleteTemplateUseCase().execute(
                uow, DeleteTemplateCommand(organization_id=ORG, template_id=template_id)
            )

        assert template_id in uow.templates.templates
        assert uow.rolled_back == 1

    def test_other_organization_cannot_delete(self):
        uow = FakeUnitOfWork()
        template_id = _create(uow)

        with pytest.raises(EntityNotFoundError):
            DeleteTemplateUseCase().execute(
                uow,
                DeleteTemplateCommand(organization_id="org-globex", template_id=template_id),
            )
