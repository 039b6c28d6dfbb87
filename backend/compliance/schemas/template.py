"""Schemas for audit templates"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ..config import settings
from ..domain.auditing.models import QuestionDraft, QuestionType, SectionDraft, TemplateDraft


# ================= Builder (input) Schemas =================

class QuestionIn(BaseModel):
    """A question as sent by the template builder"""
    text: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: QuestionType
    is_required: bool = True
    is_critical: bool = False
    weight: float = Field(default=1.0, ge=0)
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    target_value: Optional[float] = None
    unit: Optional[str] = None
    options: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_bounds(self):
        """Numeric bounds, when both given, must be ordered."""
        if self.min_value is not None and self.max_value is not None:
            if self.min_value > self.max_value:
                raise ValueError("min_value must not exceed max_value")
        return self


class SectionIn(BaseModel):
    """A section with its questions"""
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    weight: float = Field(default=1.0, ge=0)
    questions: List[QuestionIn] = Field(default_factory=list)


class TemplateIn(BaseModel):
    """Schema for creating or updating a template"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    passing_score: float = Field(default_factory=lambda: settings.default_passing_score, ge=0, le=100)
    sections: List[SectionIn] = Field(default_factory=list)

    def to_draft(self) -> TemplateDraft:
        return TemplateDraft(
            name=self.name,
            description=self.description,
            category=self.category,
            passing_score=self.passing_score,
            sections=tuple(
                SectionDraft(
                    title=s.title,
                    description=s.description,
                    weight=s.weight,
                    questions=tuple(
                        QuestionDraft(
                            text=q.text,
                            type=q.type,
                            description=q.description,
                            is_required=q.is_required,
                            is_critical=q.is_critical,
                            weight=q.weight,
                            min_value=q.min_value,
                            max_value=q.max_value,
                            target_value=q.target_value,
                            unit=q.unit,
                            options=tuple(q.options),
                        )
                        for q in s.questions
                    ),
                )
                for s in self.sections
            ),
        )


# ================= Response Schemas =================

class QuestionResponse(BaseModel):
    id: str
    text: str
    description: Optional[str] = None
    type: str
    order: int
    weight: float
    is_required: bool
    is_critical: bool
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    target_value: Optional[float] = None
    unit: Optional[str] = None
    options: List[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class SectionResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    order: int
    weight: float
    questions: List[QuestionResponse]

    class Config:
        from_attributes = True


class TemplateResponse(BaseModel):
    """Full template with ordered sections and questions"""
    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    passing_score: float
    version: int
    previous_version_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sections: List[SectionResponse]

    class Config:
        from_attributes = True


class TemplateListItemResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    passing_score: float
    version: int
    section_count: int
    audit_count: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TemplateListResponse(BaseModel):
    """List of templates"""
    templates: List[TemplateListItemResponse]
    total: int


class TemplateWriteResponse(BaseModel):
    """Result of create / update / duplicate"""
    template_id: str
    version: int = 1
    new_version_created: bool = False
