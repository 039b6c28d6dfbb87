"""Domain models for the auditing bounded context.

Pure value objects and enums describing templates, responses and audit
lifecycle, independently of any infrastructure (ORM, HTTP).  Value
objects use frozen=True; repositories hand back mutable ORM-like records
that use cases read through attribute access.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ..common.errors import InvalidTransitionError, ValidationError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class QuestionType(str, Enum):
    """Kinds of question an audit template can ask."""

    YES_NO = "yes_no"
    PASS_FAIL = "pass_fail"
    NUMERIC = "numeric"
    TEXT = "text"
    PHOTO = "photo"
    MULTI_CHOICE = "multi_choice"
    RATING = "rating"

    @classmethod
    def parse(cls, raw: object) -> "QuestionType":
        """Coerce a stored type string, raising ValidationError if unknown."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError(f"Unsupported question type: {raw!r}") from None


class AuditStatus(str, Enum):
    """Lifecycle states of an audit."""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REVIEWED = "reviewed"
    ARCHIVED = "archived"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------


_VALID_TRANSITIONS: dict[AuditStatus, frozenset[AuditStatus]] = {
    AuditStatus.DRAFT: frozenset({AuditStatus.IN_PROGRESS, AuditStatus.COMPLETED}),
    AuditStatus.IN_PROGRESS: frozenset({AuditStatus.COMPLETED}),
    # Re-completion recomputes the aggregate from the stored responses
    AuditStatus.COMPLETED: frozenset({AuditStatus.COMPLETED}),
    AuditStatus.REVIEWED: frozenset(),
    AuditStatus.ARCHIVED: frozenset(),
}


def validate_transition(current: AuditStatus, target: AuditStatus) -> None:
    """Raise InvalidTransitionError if *current* → *target* is illegal."""
    allowed = _VALID_TRANSITIONS.get(current, frozenset())
    if target not in allowed:
        raise InvalidTransitionError(current.value, target.value)


# ---------------------------------------------------------------------------
# Scoring inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoringPolicy:
    """Knobs for the behaviours the scoring rules leave open.

    ``unanswered_passes``: numeric/rating questions saved without a value,
    and multi-choice questions (which have no grading rule), count as
    passed when True and as failed when False.  Their score is 0 either way.

    ``critical_questions_override``: when True, a failed response to a
    question marked critical fails the audit even if nobody flagged it.
    """

    unanswered_passes: bool = True
    critical_questions_override: bool = False


@dataclass(frozen=True)
class QuestionSpec:
    """The parts of a template question that scoring depends on."""

    type: QuestionType
    weight: float = 1.0
    min_value: float | None = None
    max_value: float | None = None
    is_critical: bool = False

    @classmethod
    def from_record(cls, record: object) -> "QuestionSpec":
        """Build from an ORM-like question record."""
        weight = getattr(record, "weight", None)
        return cls(
            type=QuestionType.parse(getattr(record, "type")),
            weight=1.0 if weight is None else float(weight),
            min_value=getattr(record, "min_value", None),
            max_value=getattr(record, "max_value", None),
            is_critical=bool(getattr(record, "is_critical", False)),
        )


@dataclass(frozen=True)
class Answer:
    """A submitted response payload; every field is optional."""

    value: str | None = None
    bool_value: bool | None = None
    numeric_value: float | None = None


@dataclass(frozen=True)
class ResponseScore:
    """Computed score triple persisted on every response save."""

    score: float
    max_score: float
    passed: bool | None


@dataclass(frozen=True)
class ResponseOutcome:
    """A stored response as seen by the completion aggregate."""

    score: float | None
    max_score: float | None
    passed: bool | None
    flagged: bool = False
    is_critical: bool = False


# ---------------------------------------------------------------------------
# Scoring outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuditScoreSummary:
    """Aggregate written onto the audit at completion time."""

    total_score: float
    max_score: float
    percentage: float
    score_passed: bool
    has_critical_failure: bool

    @property
    def passed(self) -> bool:
        return self.score_passed and not self.has_critical_failure


@dataclass(frozen=True)
class SectionScoreSummary:
    """Per-section roll-up shown on the audit report."""

    section_id: str
    title: str
    answered: int
    passed_count: int
    pass_rate: float
    score: float
    max_score: float
    percentage: float


@dataclass(frozen=True)
class FailedItem:
    """A response that did not pass, with enough context to act on it."""

    section_title: str
    question_id: str
    question_text: str
    flagged: bool
    is_critical: bool
    notes: str | None = None


@dataclass(frozen=True)
class AuditStats:
    """Organization-wide audit statistics for the dashboard."""

    total_audits: int
    completed_audits: int
    in_progress_audits: int
    average_score: float
    pass_rate: float


# ---------------------------------------------------------------------------
# Template drafts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QuestionDraft:
    """A question as submitted by the template builder."""

    text: str
    type: QuestionType
    description: str | None = None
    is_required: bool = True
    is_critical: bool = False
    weight: float = 1.0
    min_value: float | None = None
    max_value: float | None = None
    target_value: float | None = None
    unit: str | None = None
    options: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValidationError("Question text is required")
        object.__setattr__(self, "type", QuestionType.parse(self.type))
        if self.weight < 0:
            raise ValidationError(f"weight must be >= 0, got {self.weight}")
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            raise ValidationError(
                f"min_value ({self.min_value}) exceeds max_value ({self.max_value})"
            )
        object.__setattr__(self, "options", tuple(self.options))


@dataclass(frozen=True)
class SectionDraft:
    """A section as submitted by the template builder."""

    title: str
    description: str | None = None
    weight: float = 1.0
    questions: tuple[QuestionDraft, ...] = ()

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Section title is required")
        if self.weight < 0:
            raise ValidationError(f"weight must be >= 0, got {self.weight}")
        object.__setattr__(self, "questions", tuple(self.questions))


@dataclass(frozen=True)
class TemplateDraft:
    """Full template content used for create and update."""

    name: str
    passing_score: float = 80.0
    description: str | None = None
    category: str | None = None
    sections: tuple[SectionDraft, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Name is required")
        if not 0 <= self.passing_score <= 100:
            raise ValidationError(
                f"passing_score must be between 0 and 100, got {self.passing_score}"
            )
        object.__setattr__(self, "sections", tuple(self.sections))

    @classmethod
    def from_record(cls, template: object, *, name: str | None = None) -> "TemplateDraft":
        """Snapshot an ORM-like template (with sections/questions) as a draft."""
        return cls(
            name=name or template.name,
            description=template.description,
            category=template.category,
            passing_score=template.passing_score,
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
                            options=tuple(q.options or ()),
                        )
                        for q in ordered(s.questions)
                    ),
                )
                for s in ordered(template.sections)
            ),
        )


def ordered(records) -> list:
    """Sort template sections/questions by their ``order`` field."""
    return sorted(records or [], key=lambda r: getattr(r, "order", 0) or 0)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
