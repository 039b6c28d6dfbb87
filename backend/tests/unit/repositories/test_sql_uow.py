"""Tests for SqlUnitOfWork using in-memory SQLite.

Verifies that all repositories share the same session, that committed
work is visible to a later UoW and that uncommitted work is discarded.
"""

from __future__ import annotations

from compliance.domain.auditing.models import QuestionDraft, SectionDraft, TemplateDraft
from compliance.infra.db.uow import SqlUnitOfWork


def _draft() -> TemplateDraft:
    return TemplateDraft(
        name="Closing checks",
        sections=(
            SectionDraft(
                title="Doors",
                questions=(QuestionDraft(text="Back door locked?", type="yes_no"),),
            ),
        ),
    )


class TestSqlUnitOfWork:
    def test_repos_share_session(self, session_factory):
        uow = SqlUnitOfWork(session_factory)

        with uow:
            sessions = {
                id(uow.templates._session),
                id(uow.audits._session),
                id(uow.responses._session),
            }
            assert sessions == {id(uow.session)}

    def test_session_closed_after_exit(self, session_factory):
        uow = SqlUnitOfWork(session_factory)

        with uow:
            pass

        assert uow.session is None

    def test_cross_repo_transaction(self, session_factory):
        """Create a template, start an audit on it, save a response, read back."""
        with SqlUnitOfWork(session_factory) as uow:
            template = uow.templates.create(organization_id="org-acme", draft=_draft())
            audit = uow.audits.create(
                organization_id="org-acme", template_id=template.id, site_id="s1"
            )
            question_id = template.sections[0].questions[0].id
            uow.responses.upsert(
                audit_id=audit.id,
                question_id=question_id,
                value=None,
                bool_value=True,
                numeric_value=None,
                notes=None,
                flagged=False,
                score=1.0,
                max_score=1.0,
                passed=True,
            )
            audit_id = audit.id
            uow.commit()

        with SqlUnitOfWork(session_factory) as uow:
            stored = uow.audits.get("org-acme", audit_id)
            assert len(stored.responses) == 1
            assert stored.responses[0].passed is True

    def test_uncommitted_work_is_rolled_back(self, session_factory):
        with SqlUnitOfWork(session_factory) as uow:
            uow.templates.create(organization_id="org-acme", draft=_draft())

        with SqlUnitOfWork(session_factory) as uow:
            assert uow.templates.list_with_counts("org-acme") == []
