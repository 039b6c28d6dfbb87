"""Unit of Work port: defines transactional boundary for use cases.

The UoW is a domain concept: "these operations must succeed or fail
together."  The concrete implementation (SQLAlchemy session) lives in
infra/db/uow.py.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from ..auditing.ports import (
        AuditRepository,
        ResponseRepository,
        TemplateRepository,
    )


class UnitOfWork(abc.ABC):
    """Abstract transactional boundary.

    Usage in a use case::

        with uow:
            uow.responses.upsert(audit_id=..., question_id=..., ...)
            uow.commit()
        # auto-rollback on unhandled exception
    """

    templates: "TemplateRepository"
    audits: "AuditRepository"
    responses: "ResponseRepository"

    @abc.abstractmethod
    def __enter__(self) -> Self:
        ...

    @abc.abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abc.abstractmethod
    def commit(self) -> None:
        ...

    @abc.abstractmethod
    def rollback(self) -> None:
        ...
