"""Audit scoring rules.

Turns a question definition plus a submitted answer into a weighted
score, and rolls stored responses up to section and audit level.

Per-response rules (``max_score`` is always the question weight):

  yes_no / pass_fail   passed iff bool_value is True; score = weight or 0
  numeric              passed iff value within [min, max], a missing bound
                       is unbounded; score = weight or 0
  rating               score = value / 5 * weight; passed iff value >= 3
  text / photo         always passed; score = weight
  multi_choice         no grading rule; score 0

A numeric or rating question saved without a value, and any multi-choice
question, scores 0 and takes its ``passed`` value from the ScoringPolicy.

Everything here is pure: no I/O, no clock, no persistence.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from .models import (
    Answer,
    AuditScoreSummary,
    AuditStats,
    AuditStatus,
    FailedItem,
    QuestionSpec,
    QuestionType,
    ResponseOutcome,
    ResponseScore,
    ScoringPolicy,
    SectionScoreSummary,
    ordered,
)

RATING_SCALE_MAX = 5
RATING_PASS_THRESHOLD = 3

_DEFAULT_POLICY = ScoringPolicy()

_Scorer = Callable[[QuestionSpec, Answer, ScoringPolicy], ResponseScore]


# ---------------------------------------------------------------------------
# Per-type rules
# ---------------------------------------------------------------------------


def _ungraded(question: QuestionSpec, policy: ScoringPolicy) -> ResponseScore:
    return ResponseScore(
        score=0.0, max_score=question.weight, passed=policy.unanswered_passes
    )


def _score_boolean(question: QuestionSpec, answer: Answer, policy: ScoringPolicy) -> ResponseScore:
    passed = answer.bool_value is True
    return ResponseScore(
        score=question.weight if passed else 0.0,
        max_score=question.weight,
        passed=passed,
    )


def _score_numeric(question: QuestionSpec, answer: Answer, policy: ScoringPolicy) -> ResponseScore:
    value = answer.numeric_value
    if value is None:
        return _ungraded(question, policy)
    in_range = (question.min_value is None or value >= question.min_value) and (
        question.max_value is None or value <= question.max_value
    )
    return ResponseScore(
        score=question.weight if in_range else 0.0,
        max_score=question.weight,
        passed=in_range,
    )


def _score_rating(question: QuestionSpec, answer: Answer, policy: ScoringPolicy) -> ResponseScore:
    value = answer.numeric_value
    if value is None:
        return _ungraded(question, policy)
    return ResponseScore(
        score=(value / RATING_SCALE_MAX) * question.weight,
        max_score=question.weight,
        passed=value >= RATING_PASS_THRESHOLD,
    )


def _score_presence(question: QuestionSpec, answer: Answer, policy: ScoringPolicy) -> ResponseScore:
    # Saving the response is the answer; text and photo cannot fail.
    return ResponseScore(score=question.weight, max_score=question.weight, passed=True)


def _score_multi_choice(question: QuestionSpec, answer: Answer, policy: ScoringPolicy) -> ResponseScore:
    return _ungraded(question, policy)


_SCORERS: dict[QuestionType, _Scorer] = {
    QuestionType.YES_NO: _score_boolean,
    QuestionType.PASS_FAIL: _score_boolean,
    QuestionType.NUMERIC: _score_numeric,
    QuestionType.RATING: _score_rating,
    QuestionType.TEXT: _score_presence,
    QuestionType.PHOTO: _score_presence,
    QuestionType.MULTI_CHOICE: _score_multi_choice,
}

_missing = set(QuestionType) - set(_SCORERS)
if _missing:
    raise RuntimeError(
        "No scoring rule for question types: "
        + ", ".join(sorted(t.value for t in _missing))
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_response(
    question: QuestionSpec,
    answer: Answer,
    policy: ScoringPolicy = _DEFAULT_POLICY,
) -> ResponseScore:
    """Score a single answer against its question."""
    return _SCORERS[question.type](question, answer, policy)


def summarize_audit(
    outcomes: Iterable[ResponseOutcome],
    passing_score: float,
    policy: ScoringPolicy = _DEFAULT_POLICY,
) -> AuditScoreSummary:
    """Aggregate stored responses into the audit-level verdict.

    The audit passes when its percentage reaches *passing_score* and no
    response is a critical failure: failed and flagged, or (with
    ``critical_questions_override``) failed on a critical question.
    """
    total_score = 0.0
    max_score = 0.0
    has_critical_failure = False

    for outcome in outcomes:
        total_score += outcome.score or 0.0
        max_score += outcome.max_score or 0.0
        if outcome.passed is False:
            if outcome.flagged:
                has_critical_failure = True
            elif policy.critical_questions_override and outcome.is_critical:
                has_critical_failure = True

    percentage = (total_score / max_score) * 100 if max_score > 0 else 0.0

    return AuditScoreSummary(
        total_score=total_score,
        max_score=max_score,
        percentage=percentage,
        score_passed=percentage >= passing_score,
        has_critical_failure=has_critical_failure,
    )


def summarize_sections(
    sections: Sequence[object],
    responses: Iterable[object],
) -> list[SectionScoreSummary]:
    """Roll responses up per template section, in section order.

    *sections* are ORM-like records with ``id``, ``title`` and
    ``questions``; *responses* carry ``question_id``, ``score``,
    ``max_score`` and ``passed``.
    """
    by_question = {r.question_id: r for r in responses}
    summaries: list[SectionScoreSummary] = []

    for section in ordered(sections):
        answered = [
            by_question[q.id] for q in section.questions if q.id in by_question
        ]
        passed_count = sum(1 for r in answered if r.passed is True)
        score = sum(r.score or 0.0 for r in answered)
        max_score = sum(r.max_score or 0.0 for r in answered)
        summaries.append(
            SectionScoreSummary(
                section_id=section.id,
                title=section.title,
                answered=len(answered),
                passed_count=passed_count,
                pass_rate=(passed_count / len(answered)) * 100 if answered else 0.0,
                score=score,
                max_score=max_score,
                percentage=(score / max_score) * 100 if max_score > 0 else 0.0,
            )
        )

    return summaries


def collect_failed_items(
    sections: Sequence[object],
    responses: Iterable[object],
) -> list[FailedItem]:
    """List responses with ``passed is False`` in section/question order."""
    by_question = {r.question_id: r for r in responses}
    failed: list[FailedItem] = []

    for section in ordered(sections):
        for question in ordered(section.questions):
            response = by_question.get(question.id)
            if response is None or response.passed is not False:
                continue
            failed.append(
                FailedItem(
                    section_title=section.title,
                    question_id=question.id,
                    question_text=question.text,
                    flagged=bool(response.flagged),
                    is_critical=bool(question.is_critical),
                    notes=response.notes,
                )
            )

    return failed


def summarize_stats(audits: Iterable[object]) -> AuditStats:
    """Dashboard figures over an organization's audits.

    ``average_score`` and ``pass_rate`` only consider completed audits
    and are 0 when there are none.
    """
    total = 0
    in_progress = 0
    completed: list[object] = []

    for audit in audits:
        total += 1
        if audit.status == AuditStatus.COMPLETED.value:
            completed.append(audit)
        elif audit.status == AuditStatus.IN_PROGRESS.value:
            in_progress += 1

    if completed:
        average_score = sum(a.percentage or 0.0 for a in completed) / len(completed)
        pass_rate = sum(1 for a in completed if a.passed) / len(completed) * 100
    else:
        average_score = 0.0
        pass_rate = 0.0

    return AuditStats(
        total_audits=total,
        completed_audits=len(completed),
        in_progress_audits=in_progress,
        average_score=average_score,
        pass_rate=pass_rate,
    )
