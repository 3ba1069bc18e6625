from rest_framework import serializers
from .models import Quiz, Question, Option


#
# Learner-facing quiz read. The answer key (Option.is_correct) is never listed here.
#
class OptionPublicSerializer(serializers.ModelSerializer):
    class Meta:
        model = Option
        fields = ("id", "text", "text_alt", "order")


class QuestionPublicSerializer(serializers.ModelSerializer):
    options = OptionPublicSerializer(many=True)
    type = serializers.CharField(source="qtype")

    class Meta:
        model = Question
        fields = ("id", "text", "text_alt", "type", "order", "options")


class QuizPublicSerializer(serializers.ModelSerializer):
    questions = QuestionPublicSerializer(many=True)

    class Meta:
        model = Quiz
        fields = (
            "id",
            "token",
            "title",
            "description",
            "duration_minutes",
            "is_active",
            "questions",
        )
