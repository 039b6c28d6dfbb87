"""Ports (abstract interfaces) for the auditing domain.

These define WHAT the domain needs from the outside world without
specifying HOW it's provided.  Concrete implementations live in infra/.

Note: No infrastructure types (Session, Engine) appear here.
Repositories receive their session through the UnitOfWork, not through
method parameters.  Every lookup takes the caller's organization id;
a record owned by another organization is reported as missing.
"""

from __future__ import annotations

import abc
from .models import TemplateDraft


class TemplateRepository(abc.ABC):
    """Persist and retrieve audit templates with their sections and questions."""

    @abc.abstractmethod
    def create(
        self,
        *,
        organization_id: str,
        draft: TemplateDraft,
        version: int = 1,
        previous_version_id: str | None = None,
    ) -> object:
        ...

    @abc.abstractmethod
    def get(self, organization_id: str, template_id: str) -> object | None:
        ...

    @abc.abstractmethod
    def list_with_counts(self, organization_id: str) -> list[tuple[object, int, int]]:
        """Return ``(template, section_count, audit_count)`` newest first."""
        ...

    @abc.abstractmethod
    def replace_contents(self, template: object, draft: TemplateDraft) -> object:
        """Overwrite fields and sections in place, bumping the version."""
        ...

    @abc.abstractmethod
    def count_audits(self, template_id: str) -> int:
        ...

    @abc.abstractmethod
    def delete(self, template: object) -> None:
        ...


class AuditRepository(abc.ABC):
    """Persist and retrieve audits."""

    @abc.abstractmethod
    def create(self, *, organization_id: str, template_id: str, **fields) -> object:
        ...

    @abc.abstractmethod
    def get(self, organization_id: str, audit_id: str) -> object | None:
        ...

    @abc.abstractmethod
    def list(
        self,
        organization_id: str,
        *,
        status: str | None = None,
        site_id: str | None = None,
        template_id: str | None = None,
    ) -> list[object]:
        ...

    @abc.abstractmethod
    def update_status(self, audit_id: str, status: str, **fields) -> None:
        ...

    @abc.abstractmethod
    def delete(self, audit: object) -> None:
        ...


class ResponseRepository(abc.ABC):
    """Persist and retrieve audit responses, one per (audit, question)."""

    @abc.abstractmethod
    def upsert(
        self,
        *,
        audit_id: str,
        question_id: str,
        value: str | None,
        bool_value: bool | None,
        numeric_value: float | None,
        notes: str | None,
        flagged: bool,
        score: float,
        max_score: float,
        passed: bool | None,
    ) -> object:
        """Create or fully overwrite the response for ``(audit_id, question_id)``."""
        ...

    @abc.abstractmethod
    def get(self, audit_id: str, question_id: str) -> object | None:
        ...

    @abc.abstractmethod
    def list_for_audit(self, audit_id: str) -> list[object]:
        ...
