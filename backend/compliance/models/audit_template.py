"""Audit templates: sections of typed, weighted questions"""
from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, JSON, String, Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from ._ids import new_id


class AuditTemplate(Base):
    """
    Reusable checklist owned by one organization.
    Editing a template that already has audits produces a new row
    (version + 1) pointing back at the one it replaces.
    """
    __tablename__ = "audit_templates"

    id = Column(String(36), primary_key=True, default=new_id)
    organization_id = Column(String(64), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)

    # Percentage (0-100) an audit must reach to pass
    passing_score = Column(Float, nullable=False, default=80.0)

    version = Column(Integer, nullable=False, default=1)
    previous_version_id = Column(
        String(36), ForeignKey("audit_templates.id", ondelete="SET NULL"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    sections = relationship(
        "TemplateSection",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateSection.order",
    )

    __table_args__ = (
        Index("idx_template_org_updated", "organization_id", "updated_at"),
    )


class TemplateSection(Base):
    """Ordered group of questions within a template."""
    __tablename__ = "template_sections"

    id = Column(String(36), primary_key=True, default=new_id)
    template_id = Column(
        String(36), ForeignKey("audit_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    weight = Column(Float, nullable=False, default=1.0)  # informational

    template = relationship("AuditTemplate", back_populates="sections")
    questions = relationship(
        "TemplateQuestion",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="TemplateQuestion.order",
    )


class TemplateQuestion(Base):
    """
    A single question. ``type`` is one of yes_no, pass_fail, numeric,
    text, photo, multi_choice, rating.
    """
    __tablename__ = "template_questions"

    id = Column(String(36), primary_key=True, default=new_id)
    section_id = Column(
        String(36), ForeignKey("template_sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False)
    is_required = Column(Boolean, nullable=False, default=True)
    is_critical = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)
    weight = Column(Float, nullable=False, default=1.0)

    # Numeric questions only; a NULL bound is open on that side
    min_value = Column(Float, nullable=True)
    max_value = Column(Float, nullable=True)
    target_value = Column(Float, nullable=True)  # display only
    unit = Column(String(20), nullable=True)

    options = Column(JSON, nullable=True)  # multi_choice labels

    section = relationship("TemplateSection", back_populates="questions")
