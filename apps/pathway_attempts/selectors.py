# apps/pathway_attempts/selectors.py
from __future__ import annotations
from collections import defaultdict

from apps.pathway_common.exceptions import NotFound
from apps.pathway_quizzes.models import Question
from . import scoring
from .models import QuizAttempt, AttemptAnswer, AttemptGrade

__all__ = ["get_attempt", "get_questions_with_key", "get_answer_sets", "get_stored_grades"]


def get_attempt(attempt_id, for_update: bool = False) -> QuizAttempt:
    """Attempt with its quiz. ``for_update`` locks the row; call inside a transaction."""
    qs = QuizAttempt.objects.select_related("quiz")
    if for_update:
        qs = qs.select_for_update(of=("self",))
    attempt = qs.filter(pk=attempt_id).first()
    if attempt is None:
        raise NotFound("Quiz attempt not found")
    return attempt


def get_questions_with_key(quiz_id: int) -> list[Question]:
    """
    Questions in quiz order with all option fields, ``is_correct`` included.
    Grading and result projection only.
    """
    return list(
        Question.objects.filter(quiz_id=quiz_id).prefetch_related("options")
    )


def get_answer_sets(attempt: QuizAttempt) -> dict[int, set[int]]:
    """question_id -> selected option ids. Answers saved with no selection map to an empty set."""
    out: dict[int, set[int]] = defaultdict(set)
    answers = AttemptAnswer.objects.filter(attempt=attempt).prefetch_related("selected_options")
    for answer in answers:
        out[answer.question_id].update(o.id for o in answer.selected_options.all())
    return dict(out)


def get_stored_grades(attempt: QuizAttempt) -> scoring.GradeResult:
    """Outcome committed at submission. Later content edits do not change it."""
    rows = AttemptGrade.objects.filter(attempt=attempt).order_by("question__order", "question_id")
    graded = tuple(
        scoring.GradedQuestion(
            question_id=row.question_id,
            is_correct=row.is_correct,
            correct_option_ids=frozenset(row.correct_option_ids),
            selected_option_ids=frozenset(row.selected_option_ids),
        )
        for row in rows
    )
    return scoring.GradeResult(score=attempt.score or 0, questions=graded)
