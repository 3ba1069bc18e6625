import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from apps.pathway_attempts import scoring, services
from apps.pathway_attempts.models import QuizAttempt, AttemptAnswer, AttemptGrade
from apps.pathway_attempts.selectors import get_answer_sets
from apps.pathway_common.exceptions import (
    AlreadySubmitted,
    Inactive,
    InvalidReference,
    NotFound,
    NotSubmitted,
)
from apps.pathway_quizzes.models import Option, QuestionType


#
# Attempt ledger
#

@pytest.mark.django_db
def test_start_snapshots_question_count_and_defaults(make_quiz):
    quiz = make_quiz(
        [
            (QuestionType.SINGLE_CHOICE, ["A*", "B"]),
            (QuestionType.SINGLE_CHOICE, ["A*", "B"]),
            (QuestionType.MULTIPLE_CHOICE, ["A*", "B*"]),
        ],
        duration_minutes=15,
    )

    attempt = services.start_attempt(quiz.token, "te")

    assert attempt.total_questions == 3
    assert attempt.is_submitted is False
    assert attempt.score is None
    assert attempt.submitted_at is None
    assert attempt.token == quiz.token
    assert attempt.language == "te"
    assert attempt.deadline == attempt.started_at + timedelta(minutes=15)


@pytest.mark.django_db
@pytest.mark.parametrize("language", [None, "", "fr", "klingon"])
def test_start_falls_back_to_primary_language(single_choice_quiz, language):
    attempt = services.start_attempt(single_choice_quiz.token, language)
    assert attempt.language == "en"


@pytest.mark.django_db
def test_start_never_deduplicates(single_choice_quiz):
    first = services.start_attempt(single_choice_quiz.token)
    second = services.start_attempt(single_choice_quiz.token)
    assert first.id != second.id
    assert QuizAttempt.objects.filter(quiz=single_choice_quiz).count() == 2


@pytest.mark.django_db
def test_start_unknown_or_inactive_quiz(make_quiz):
    with pytest.raises(NotFound):
        services.start_attempt("quiz-does-not-exist")

    quiz = make_quiz([(QuestionType.SINGLE_CHOICE, ["A*"])], is_active=False)
    with pytest.raises(Inactive):
        services.start_attempt(quiz.token)
    assert not QuizAttempt.objects.exists()


#
# Answer journal
#

@pytest.mark.django_db
def test_resubmitting_replaces_the_selection(multiple_choice_quiz, option_ids):
    attempt = services.start_attempt(multiple_choice_quiz.token)
    question = multiple_choice_quiz.questions.get()

    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))
    services.submit_answer(attempt.id, question.id, option_ids(question, "C"))

    assert get_answer_sets(attempt) == {question.id: set(option_ids(question, "C"))}
    assert AttemptAnswer.objects.filter(attempt=attempt, question=question).count() == 1


@pytest.mark.django_db
def test_same_answer_twice_is_idempotent(multiple_choice_quiz, option_ids):
    attempt = services.start_attempt(multiple_choice_quiz.token)
    question = multiple_choice_quiz.questions.get()
    picked = option_ids(question, "A", "B")

    services.submit_answer(attempt.id, question.id, picked)
    services.submit_answer(attempt.id, question.id, picked)

    assert get_answer_sets(attempt) == {question.id: set(picked)}


@pytest.mark.django_db
def test_empty_selection_is_stored(single_choice_quiz, option_ids):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()

    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))
    services.submit_answer(attempt.id, question.id, [])

    assert get_answer_sets(attempt) == {question.id: set()}


@pytest.mark.django_db
def test_answer_reference_checks(make_quiz, single_choice_quiz, option_ids):
    other = make_quiz([(QuestionType.SINGLE_CHOICE, ["X*", "Y"])])
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    foreign_question = other.questions.get()

    with pytest.raises(NotFound):
        services.submit_answer(uuid.uuid4(), question.id, [])
    with pytest.raises(InvalidReference):
        services.submit_answer(attempt.id, foreign_question.id, option_ids(foreign_question, "X"))
    with pytest.raises(InvalidReference):
        services.submit_answer(attempt.id, question.id, option_ids(question, "A") + option_ids(foreign_question, "X"))

    assert get_answer_sets(attempt) == {}


@pytest.mark.django_db
def test_no_answers_after_submit(single_choice_quiz, option_ids):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    services.submit_attempt(attempt.id)

    with pytest.raises(AlreadySubmitted):
        services.submit_answer(attempt.id, question.id, option_ids(question, "A"))
    assert get_answer_sets(attempt) == {}


#
# Submission
#

@pytest.mark.django_db
def test_single_choice_scenario(single_choice_quiz, option_ids):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))

    graded = services.submit_attempt(attempt.id)

    assert graded.result.score == 1
    assert graded.result.questions[0].is_correct is True
    assert graded.result.questions[0].correct_option_ids == frozenset(option_ids(question, "A"))
    assert graded.result.questions[0].selected_option_ids == frozenset(option_ids(question, "A"))

    stored = QuizAttempt.objects.get(pk=attempt.pk)
    assert stored.is_submitted is True
    assert stored.score == 1
    assert stored.submitted_at is not None


@pytest.mark.django_db
def test_partial_multiple_choice_scores_zero(multiple_choice_quiz, option_ids):
    attempt = services.start_attempt(multiple_choice_quiz.token)
    question = multiple_choice_quiz.questions.get()
    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))

    graded = services.submit_attempt(attempt.id)

    assert graded.result.score == 0
    assert graded.result.questions[0].is_correct is False


@pytest.mark.django_db
def test_untouched_question_counts_as_wrong(make_quiz, option_ids):
    quiz = make_quiz(
        [
            (QuestionType.SINGLE_CHOICE, ["A*", "B"]),
            (QuestionType.MULTIPLE_CHOICE, ["A*", "B*", "C"]),
            (QuestionType.SINGLE_CHOICE, ["A", "B*"]),
        ]
    )
    q1, q2, q3 = quiz.questions.all()
    attempt = services.start_attempt(quiz.token)
    services.submit_answer(attempt.id, q1.id, option_ids(q1, "A"))
    services.submit_answer(attempt.id, q2.id, option_ids(q2, "A", "B"))

    graded = services.submit_attempt(attempt.id)

    assert graded.result.score == 2
    assert graded.result.for_question(q3.id).is_correct is False
    assert graded.result.for_question(q3.id).selected_option_ids == frozenset()


@pytest.mark.django_db
def test_second_submit_keeps_first_result(single_choice_quiz, option_ids):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))
    services.submit_attempt(attempt.id)
    first = QuizAttempt.objects.get(pk=attempt.pk)

    with pytest.raises(AlreadySubmitted):
        services.submit_attempt(attempt.id)

    again = QuizAttempt.objects.get(pk=attempt.pk)
    assert again.score == first.score == 1
    assert again.submitted_at == first.submitted_at


@pytest.mark.django_db
def test_submit_losing_a_race_keeps_the_winner(single_choice_quiz, option_ids, monkeypatch):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))
    real_grade = scoring.grade
    won_at = timezone.now() - timedelta(seconds=5)

    def racing_grade(keys, answers):
        # another submit commits while this one is grading
        QuizAttempt.objects.filter(pk=attempt.pk).update(is_submitted=True, score=0, submitted_at=won_at)
        return real_grade(keys, answers)

    monkeypatch.setattr(scoring, "grade", racing_grade)

    with pytest.raises(AlreadySubmitted):
        services.submit_attempt(attempt.id)

    stored = QuizAttempt.objects.get(pk=attempt.pk)
    assert stored.is_submitted is True
    assert stored.score == 0
    assert stored.submitted_at == won_at
    assert not AttemptGrade.objects.filter(attempt=attempt).exists()


@pytest.mark.django_db
def test_answer_racing_a_submit_is_not_kept(single_choice_quiz, option_ids, monkeypatch):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    real_get_attempt = services.get_attempt
    calls = []

    def racing_get_attempt(attempt_id, for_update=False):
        calls.append(for_update)
        locked = real_get_attempt(attempt_id, for_update=for_update)
        # a submit commits right after the answer read the attempt
        QuizAttempt.objects.filter(pk=attempt.pk).update(is_submitted=True, score=0)
        return locked

    monkeypatch.setattr(services, "get_attempt", racing_get_attempt)

    with pytest.raises(AlreadySubmitted):
        services.submit_answer(attempt.id, question.id, option_ids(question, "A"))

    assert calls == [True]
    assert not AttemptAnswer.objects.filter(attempt=attempt).exists()


@pytest.mark.django_db
def test_submit_stores_a_grade_row_per_question(make_quiz, option_ids):
    quiz = make_quiz(
        [
            (QuestionType.SINGLE_CHOICE, ["A*", "B"]),
            (QuestionType.MULTIPLE_CHOICE, ["A*", "B*", "C"]),
        ]
    )
    q1, q2 = quiz.questions.all()
    attempt = services.start_attempt(quiz.token)
    services.submit_answer(attempt.id, q1.id, option_ids(q1, "A"))

    services.submit_attempt(attempt.id)

    rows = {g.question_id: g for g in AttemptGrade.objects.filter(attempt=attempt)}
    assert set(rows) == {q1.id, q2.id}
    assert rows[q1.id].is_correct is True
    assert rows[q1.id].selected_option_ids == option_ids(q1, "A")
    assert rows[q2.id].is_correct is False
    assert rows[q2.id].selected_option_ids == []
    assert rows[q2.id].correct_option_ids == sorted(option_ids(q2, "A", "B"))


@pytest.mark.django_db
def test_results_ignore_answer_key_edits_after_submit(single_choice_quiz, option_ids):
    attempt = services.start_attempt(single_choice_quiz.token)
    question = single_choice_quiz.questions.get()
    services.submit_answer(attempt.id, question.id, option_ids(question, "A"))
    submitted = services.submit_attempt(attempt.id)

    # author moves the key from A to B after the learner submitted
    Option.objects.filter(question=question, text="A").update(is_correct=False)
    Option.objects.filter(question=question, text="B").update(is_correct=True)

    fetched = services.get_attempt_results(attempt.id)

    assert fetched.attempt.score == 1
    assert fetched.result == submitted.result
    assert fetched.result.questions[0].is_correct is True
    assert fetched.result.questions[0].correct_option_ids == frozenset(option_ids(question, "A"))


@pytest.mark.django_db
def test_submit_unknown_attempt():
    with pytest.raises(NotFound):
        services.submit_attempt(uuid.uuid4())


#
# Results
#

@pytest.mark.django_db
def test_results_before_submit(single_choice_quiz):
    attempt = services.start_attempt(single_choice_quiz.token)
    with pytest.raises(NotSubmitted):
        services.get_attempt_results(attempt.id)


@pytest.mark.django_db
def test_results_match_submission(multiple_choice_quiz, option_ids):
    attempt = services.start_attempt(multiple_choice_quiz.token)
    question = multiple_choice_quiz.questions.get()
    services.submit_answer(attempt.id, question.id, option_ids(question, "A", "B"))
    submitted = services.submit_attempt(attempt.id)

    fetched = services.get_attempt_results(attempt.id)

    assert fetched.attempt.score == submitted.result.score == 1
    assert fetched.result == submitted.result
