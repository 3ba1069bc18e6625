# apps/pathway_quizzes/selectors.py
from __future__ import annotations
from django.db.models import Prefetch

from apps.pathway_common.exceptions import NotFound, Inactive
from .models import Quiz, Question, Option

__all__ = ["get_active_quiz", "get_public_quiz"]


def get_active_quiz(token: str) -> Quiz:
    """
    Quiz by public token, without questions.
    Raises NotFound / Inactive.
    """
    quiz = Quiz.objects.filter(token=token).first()
    if quiz is None:
        raise NotFound("Quiz not found")
    if not quiz.is_active:
        raise Inactive()
    return quiz


def get_public_quiz(token: str) -> Quiz:
    """
    Learner-facing read: questions and options in display order.
    Options are loaded without ``is_correct``.
    """
    options = Option.objects.only("id", "question_id", "text", "text_alt", "order")
    questions = Question.objects.prefetch_related(Prefetch("options", queryset=options))
    qs = Quiz.objects.prefetch_related(Prefetch("questions", queryset=questions))

    quiz = qs.filter(token=token).first()
    if quiz is None:
        raise NotFound("Quiz not found")
    if not quiz.is_active:
        raise Inactive()
    return quiz
