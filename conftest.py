import pytest


@pytest.fixture
def make_quiz(db):
    """
    make_quiz([("SINGLE_CHOICE", ["A*", "B", "C"]), ...]) -> Quiz
    A trailing "*" marks a correct option.
    """
    from apps.pathway_quizzes.models import Quiz, Question, Option

    def _make(questions, **quiz_fields):
        quiz_fields.setdefault("title", "Test quiz")
        quiz_fields.setdefault("duration_minutes", 10)
        quiz = Quiz.objects.create(**quiz_fields)
        for q_order, (qtype, options) in enumerate(questions, start=1):
            question = Question.objects.create(
                quiz=quiz,
                text=f"Question {q_order}",
                text_alt=f"ప్రశ్న {q_order}",
                qtype=qtype,
                order=q_order,
            )
            for o_order, label in enumerate(options, start=1):
                Option.objects.create(
                    question=question,
                    text=label.rstrip("*"),
                    text_alt=f"{label.rstrip('*')}-te",
                    is_correct=label.endswith("*"),
                    order=o_order,
                )
        return quiz

    return _make


@pytest.fixture
def single_choice_quiz(make_quiz):
    return make_quiz([("SINGLE_CHOICE", ["A*", "B", "C"])])


@pytest.fixture
def multiple_choice_quiz(make_quiz):
    return make_quiz([("MULTIPLE_CHOICE", ["A*", "B*", "C"])])


@pytest.fixture
def option_ids():
    """option_ids(question, "A", "B") -> ids of the options with that primary text"""
    def _ids(question, *labels):
        return [o.id for o in question.options.all() if o.text in labels]

    return _ids
