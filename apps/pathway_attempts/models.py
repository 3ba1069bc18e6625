import uuid
from datetime import timedelta

from django.db import models

from apps.pathway_quizzes.models import Quiz, Question, Option


class QuizAttempt(models.Model):
    """
    One learner's timed run through a quiz.
    InProgress while is_submitted is False; Submitted is terminal and immutable.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="attempts")
    token = models.CharField(max_length=64)  # quiz link the attempt was started from
    language = models.CharField(max_length=10, default="en")

    started_at = models.DateTimeField(auto_now_add=True)
    total_questions = models.PositiveIntegerField(default=0)  # snapshot at start

    is_submitted = models.BooleanField(default=False)
    submitted_at = models.DateTimeField(null=True, blank=True)
    score = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        ordering = ["-started_at"]
        indexes = [
            models.Index(fields=["quiz", "is_submitted"], name="attempt_quiz_submitted_idx"),
        ]

    @property
    def deadline(self):
        """Client-side auto-submit time. The server does not enforce it."""
        return self.started_at + timedelta(minutes=self.quiz.duration_minutes)

    def __str__(self):
        state = f"score={self.score}" if self.is_submitted else "in progress"
        return f"{self.quiz_id} / {self.id} ({state})"


class AttemptAnswer(models.Model):
    """Current selection for one question. Resubmitting replaces it."""
    attempt = models.ForeignKey(QuizAttempt, on_delete=models.CASCADE, related_name="answers")
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="+")
    selected_options = models.ManyToManyField(Option, blank=True, related_name="+")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("attempt", "question")

    def __str__(self):
        return f"{self.attempt_id} q={self.question_id}"


class AttemptGrade(models.Model):
    """
    Per-question outcome written once at submission, one row per question
    including unanswered ones. Results are read from here, never re-graded.
    """
    attempt = models.ForeignKey(QuizAttempt, on_delete=models.CASCADE, related_name="grades")
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="+")
    is_correct = models.BooleanField(default=False)
    correct_option_ids = models.JSONField(default=list)
    selected_option_ids = models.JSONField(default=list)

    class Meta:
        unique_together = ("attempt", "question")

    def __str__(self):
        return f"{self.attempt_id} q={self.question_id} correct={self.is_correct}"
