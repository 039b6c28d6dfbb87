"""SQLAlchemy Unit of Work: one session, one transaction per use case."""

from __future__ import annotations

from typing import Callable, Self

from sqlalchemy.orm import Session

from compliance.domain.common.uow import UnitOfWork
from compliance.infra.db.repositories.audit_repo import SqlAuditRepository
from compliance.infra.db.repositories.response_repo import SqlResponseRepository
from compliance.infra.db.repositories.template_repo import SqlTemplateRepository


class SqlUnitOfWork(UnitOfWork):
    """Opens a session on ``__enter__`` and binds every repository to it.

    Anything not committed when the block exits is rolled back.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self.session: Session | None = None

    def __enter__(self) -> Self:
        self.session = self._session_factory()
        self.templates = SqlTemplateRepository(self.session)
        self.audits = SqlAuditRepository(self.session)
        self.responses = SqlResponseRepository(self.session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            self.rollback()
        finally:
            self.session.close()
            self.session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
