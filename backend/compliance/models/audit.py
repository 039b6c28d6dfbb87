"""Audits and their per-question responses"""
from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Index, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from ._ids import new_id


class Audit(Base):
    """
    One execution of a template at a site.
    Score fields stay NULL until the audit is completed.
    """
    __tablename__ = "audits"

    id = Column(String(36), primary_key=True, default=new_id)
    organization_id = Column(String(64), nullable=False, index=True)
    template_id = Column(String(36), ForeignKey("audit_templates.id"), nullable=False, index=True)

    # Sites and users live in other services; only their ids are stored
    site_id = Column(String(64), nullable=False, index=True)
    auditor_id = Column(String(64), nullable=True)

    status = Column(String(20), nullable=False, default="draft", index=True)
    scheduled_for = Column(DateTime(timezone=True), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Aggregate computed at completion
    total_score = Column(Float, nullable=True)
    max_score = Column(Float, nullable=True)
    percentage = Column(Float, nullable=True)
    passed = Column(Boolean, nullable=True)

    auditor_signature = Column(Text, nullable=True)
    auditor_signed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    template = relationship("AuditTemplate")
    responses = relationship(
        "AuditResponse",
        back_populates="audit",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_audit_org_status", "organization_id", "status"),
    )


class AuditResponse(Base):
    """
    Answer to one question of one audit. Overwritten in full on every save.
    """
    __tablename__ = "audit_responses"

    id = Column(String(36), primary_key=True, default=new_id)
    audit_id = Column(String(36), ForeignKey("audits.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(String(36), ForeignKey("template_questions.id"), nullable=False)

    value = Column(Text, nullable=True)
    bool_value = Column(Boolean, nullable=True)
    numeric_value = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    flagged = Column(Boolean, nullable=False, default=False)

    score = Column(Float, nullable=True)
    max_score = Column(Float, nullable=True)
    passed = Column(Boolean, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    audit = relationship("Audit", back_populates="responses")
    question = relationship("TemplateQuestion")

    # One response per question per audit
    __table_args__ = (
        UniqueConstraint("audit_id", "question_id", name="uix_audit_question"),
    )
