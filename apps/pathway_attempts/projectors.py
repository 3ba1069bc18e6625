# apps/pathway_attempts/projectors.py
"""
Graded view of a submitted attempt.

Only reachable after submission: the learner-facing quiz read lives in
apps.pathway_quizzes.serializers and never sees the answer key.
"""
from __future__ import annotations

from apps.pathway_common.utils import localized_text

from .models import QuizAttempt
from .scoring import GradeResult


def _project_option(option, language: str) -> dict:
    return {
        "id": option.id,
        "text": localized_text(option.text, option.text_alt, language),
        "text_primary": option.text,
        "text_alt": option.text_alt,
    }


def project_result(attempt: QuizAttempt, questions, graded: GradeResult, language: str | None = None) -> dict:
    """
    questions: Question rows in quiz order with options loaded
    graded:    Scoring result for the same questions
    language:  defaults to the attempt's language

    The aggregate score and total come from the attempt row, which was
    committed exactly once at submission.
    """
    language = language or attempt.language

    projected = []
    for question in questions:
        result = graded.for_question(question.id)
        correct_ids = result.correct_option_ids if result else frozenset()
        selected_ids = result.selected_option_ids if result else frozenset()
        options = list(question.options.all())

        projected.append(
            {
                "id": question.id,
                "text": localized_text(question.text, question.text_alt, language),
                "text_primary": question.text,
                "text_alt": question.text_alt,
                "type": question.qtype,
                "order": question.order,
                "correct_options": [_project_option(o, language) for o in options if o.id in correct_ids],
                "user_selected_options": [_project_option(o, language) for o in options if o.id in selected_ids],
                "is_correct": bool(result and result.is_correct),
            }
        )

    return {
        "attempt_id": attempt.id,
        "quiz": {"id": attempt.quiz.id, "title": attempt.quiz.title},
        "score": attempt.score,
        "total_questions": attempt.total_questions,
        "started_at": attempt.started_at,
        "submitted_at": attempt.submitted_at,
        "language": language,
        "questions": projected,
    }
