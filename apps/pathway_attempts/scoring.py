# apps/pathway_attempts/scoring.py
"""
Exact-match grading.

Pure functions over plain data: nothing here touches the database, and
nothing here decides what the learner may see.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from apps.pathway_quizzes.models import QuestionType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerKey:
    question_id: int
    qtype: str
    correct_option_ids: frozenset[int]


@dataclass(frozen=True)
class GradedQuestion:
    question_id: int
    is_correct: bool
    correct_option_ids: frozenset[int]
    selected_option_ids: frozenset[int]


@dataclass(frozen=True)
class GradeResult:
    score: int
    questions: tuple[GradedQuestion, ...]

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    def for_question(self, question_id: int) -> GradedQuestion | None:
        for graded in self.questions:
            if graded.question_id == question_id:
                return graded
        return None


def answer_keys_for(questions: Iterable) -> list[AnswerKey]:
    """
    Build answer keys from Question rows with their options loaded.
    Keeps the given question order.
    """
    return [
        AnswerKey(
            question_id=q.id,
            qtype=q.qtype,
            correct_option_ids=frozenset(o.id for o in q.options.all() if o.is_correct),
        )
        for q in questions
    ]


def _grade_single_choice(correct: frozenset[int], selected: frozenset[int]) -> bool:
    if len(correct) != 1 or len(selected) != 1:
        return False
    return selected <= correct


def _grade_multiple_choice(correct: frozenset[int], selected: frozenset[int]) -> bool:
    if not correct:
        return False
    return selected == correct


_RULES = {
    QuestionType.SINGLE_CHOICE.value: _grade_single_choice,
    QuestionType.MULTIPLE_CHOICE.value: _grade_multiple_choice,
}


def _is_malformed(key: AnswerKey) -> bool:
    if key.qtype not in _RULES:
        return True
    if not key.correct_option_ids:
        return True
    return key.qtype == QuestionType.SINGLE_CHOICE and len(key.correct_option_ids) != 1


def grade(keys: Iterable[AnswerKey], answers: Mapping[int, Iterable[int]]) -> GradeResult:
    """
    Grade every question in ``keys`` against the learner's selections.

    - answers: question_id -> selected option ids; a missing question counts as no selection
    - SINGLE_CHOICE: exactly one option selected and it is the single correct one
    - MULTIPLE_CHOICE: selected set equals the correct set, no partial credit
    - malformed authoring data grades as incorrect, never raises
    """
    graded = []
    score = 0
    for key in keys:
        selected = frozenset(answers.get(key.question_id, ()))

        if _is_malformed(key):
            log.warning(
                "[grade] malformed question %s (type=%s, correct=%d), graded incorrect",
                key.question_id, key.qtype, len(key.correct_option_ids),
            )
            is_correct = False
        else:
            is_correct = _RULES[key.qtype](key.correct_option_ids, selected)

        if is_correct:
            score += 1
        graded.append(
            GradedQuestion(
                question_id=key.question_id,
                is_correct=is_correct,
                correct_option_ids=key.correct_option_ids,
                selected_option_ids=selected,
            )
        )
    return GradeResult(score=score, questions=tuple(graded))
