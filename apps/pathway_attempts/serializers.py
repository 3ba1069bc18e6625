from rest_framework import serializers


class OptionIdsField(serializers.ListField):
    """List of option ids; a single id is accepted as a one-item list."""

    child = serializers.IntegerField(min_value=1)

    def to_internal_value(self, data):
        if not isinstance(data, (list, tuple)):
            data = [data]
        return super().to_internal_value(data)


#
# Requests
#
class StartAttemptSerializer(serializers.Serializer):
    # any JSON value; unknown codes and non-strings fall back to the primary language
    language = serializers.JSONField(required=False, allow_null=True, default=None)


class SubmitAnswerSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    option_ids = OptionIdsField(allow_empty=True)


#
# Responses
#
class StartAttemptResponseSerializer(serializers.Serializer):
    attempt_id = serializers.UUIDField(source="id")
    started_at = serializers.DateTimeField()
    deadline = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(source="quiz.duration_minutes")
    total_questions = serializers.IntegerField()
    language = serializers.CharField()


class ResultOptionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    text = serializers.CharField()
    text_primary = serializers.CharField()
    text_alt = serializers.CharField(allow_blank=True)


class ResultQuestionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    text = serializers.CharField()
    text_primary = serializers.CharField()
    text_alt = serializers.CharField(allow_blank=True)
    type = serializers.CharField()
    order = serializers.IntegerField()
    correct_options = ResultOptionSerializer(many=True)
    user_selected_options = ResultOptionSerializer(many=True)
    is_correct = serializers.BooleanField()


class ResultQuizSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()


class AttemptResultSerializer(serializers.Serializer):
    attempt_id = serializers.UUIDField()
    quiz = ResultQuizSerializer()
    score = serializers.IntegerField()
    total_questions = serializers.IntegerField()
    started_at = serializers.DateTimeField()
    submitted_at = serializers.DateTimeField()
    language = serializers.CharField()
    questions = ResultQuestionSerializer(many=True)
