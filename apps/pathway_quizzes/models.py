from django.db import models

from apps.pathway_common.tokens import generate_unique_token


class QuestionType(models.TextChoices):
    SINGLE_CHOICE   = "SINGLE_CHOICE", "Single choice"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE", "Multiple choice"


class Quiz(models.Model):
    title            = models.CharField(max_length=255)
    description      = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(default=10)
    is_active        = models.BooleanField(default=True)
    # public link slug, e.g. "quiz-k3j9x0aqzq2"
    token            = models.CharField(max_length=64, unique=True, blank=True)
    created_at       = models.DateTimeField(auto_now_add=True)
    updated_at       = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if not self.token:
            self.token = generate_unique_token(Quiz)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.title} ({self.token})"


class Question(models.Model):
    quiz      = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="questions")
    text      = models.TextField()
    text_alt  = models.TextField(blank=True)  # secondary language
    qtype     = models.CharField(max_length=32, choices=QuestionType.choices, default=QuestionType.SINGLE_CHOICE)
    order     = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["order", "id"]

    def __str__(self):
        return self.text[:50]


class Option(models.Model):
    question    = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="options")
    text        = models.CharField(max_length=512)
    text_alt    = models.CharField(max_length=512, blank=True)
    is_correct  = models.BooleanField(default=False)
    order       = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["order", "id"]

    def __str__(self):
        return self.text
