# apps/pathway_attempts/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from django.db import transaction
from django.utils import timezone

from apps.pathway_common.exceptions import (
    AlreadySubmitted,
    InvalidReference,
    NotSubmitted,
)
from apps.pathway_common.utils import resolve_language
from apps.pathway_quizzes.models import Question, Option
from apps.pathway_quizzes.selectors import get_active_quiz

from . import scoring
from .models import QuizAttempt, AttemptAnswer, AttemptGrade
from .selectors import get_attempt, get_questions_with_key, get_answer_sets, get_stored_grades

log = logging.getLogger(__name__)


@dataclass
class GradedAttempt:
    attempt: QuizAttempt
    questions: list[Question]
    result: scoring.GradeResult


#
# 1. Attempt ledger
#


def start_attempt(token: str, language=None) -> QuizAttempt:
    """
    New InProgress attempt on an active quiz.
    Every call creates its own attempt, even for the same learner and link.
    Raises NotFound / Inactive.
    """
    quiz = get_active_quiz(token)
    attempt = QuizAttempt.objects.create(
        quiz=quiz,
        token=token,
        language=resolve_language(language),
        total_questions=Question.objects.filter(quiz=quiz).count(),
    )
    log.info(
        "[attempt] started %s quiz=%s questions=%s lang=%s",
        attempt.id, quiz.id, attempt.total_questions, attempt.language,
    )
    return attempt


#
# 2. Answer journal
#


@transaction.atomic
def submit_answer(attempt_id, question_id: int, option_ids: Iterable[int]) -> AttemptAnswer:
    """
    Replace the selection for (attempt, question). An empty selection is allowed.
    Holds the attempt row lock so a concurrent submit sees all of it or none of it.
    Raises NotFound / AlreadySubmitted / InvalidReference.
    """
    attempt = get_attempt(attempt_id, for_update=True)
    if attempt.is_submitted:
        raise AlreadySubmitted(attempt_id=attempt.id)

    question = Question.objects.filter(id=question_id, quiz_id=attempt.quiz_id).first()
    if question is None:
        raise InvalidReference("Question not found in this quiz")

    wanted = set(option_ids)
    options = list(Option.objects.filter(question=question, id__in=wanted))
    if len(options) != len(wanted):
        raise InvalidReference("Some options do not belong to this question")

    answer, _ = AttemptAnswer.objects.get_or_create(attempt=attempt, question=question)
    answer.selected_options.set(options)
    answer.save(update_fields=["updated_at"])

    # backends without row locks: re-check after writing, the raise rolls the write back
    if not QuizAttempt.objects.filter(pk=attempt.pk, is_submitted=False).exists():
        raise AlreadySubmitted(attempt_id=attempt.id)
    return answer


#
# 3. Submission
#


def submit_attempt(attempt_id) -> GradedAttempt:
    """
    InProgress -> Submitted, exactly once.

    Grades the journaled answers against the quiz's current questions and
    commits submitted/submitted_at/score with a single conditional update,
    together with one AttemptGrade row per question. A second call, or the
    loser of a race, writes nothing and gets AlreadySubmitted.
    """
    with transaction.atomic():
        attempt = get_attempt(attempt_id, for_update=True)
        if attempt.is_submitted:
            raise AlreadySubmitted(attempt_id=attempt.id)

        questions = get_questions_with_key(attempt.quiz_id)
        answers = get_answer_sets(attempt)
        result = scoring.grade(scoring.answer_keys_for(questions), answers)

        now = timezone.now()
        updated = QuizAttempt.objects.filter(pk=attempt.pk, is_submitted=False).update(
            is_submitted=True,
            submitted_at=now,
            score=result.score,
        )
        if updated == 1:
            AttemptGrade.objects.bulk_create(
                [
                    AttemptGrade(
                        attempt=attempt,
                        question_id=graded.question_id,
                        is_correct=graded.is_correct,
                        correct_option_ids=sorted(graded.correct_option_ids),
                        selected_option_ids=sorted(graded.selected_option_ids),
                    )
                    for graded in result.questions
                ]
            )

    if updated != 1:
        log.warning("[attempt] %s lost a submit race, keeping the stored result", attempt.id)
        raise AlreadySubmitted(attempt_id=attempt.id)

    attempt.is_submitted = True
    attempt.submitted_at = now
    attempt.score = result.score
    log.info("[attempt] submitted %s score=%s/%s", attempt.id, result.score, attempt.total_questions)
    return GradedAttempt(attempt=attempt, questions=questions, result=result)


def get_attempt_results(attempt_id) -> GradedAttempt:
    """
    Graded view of a submitted attempt, read from the outcome stored at submission.
    Raises NotFound / NotSubmitted.
    """
    attempt = get_attempt(attempt_id)
    if not attempt.is_submitted:
        raise NotSubmitted()

    questions = get_questions_with_key(attempt.quiz_id)
    return GradedAttempt(attempt=attempt, questions=questions, result=get_stored_grades(attempt))
