# apps/pathway_attempts/views.py
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response
from rest_framework import status, permissions

from apps.pathway_common.exceptions import QuizPlayerError
from apps.pathway_common.utils import ApiResponse, error_response

from .projectors import project_result
from .serializers import (
    StartAttemptSerializer,
    StartAttemptResponseSerializer,
    SubmitAnswerSerializer,
    AttemptResultSerializer,
)
from .services import (
    start_attempt,
    submit_answer,
    submit_attempt,
    get_attempt_results,
)


def _result_payload(graded):
    view = project_result(graded.attempt, graded.questions, graded.result)
    return AttemptResultSerializer(view).data


@api_view(["POST"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def start(request, token):
    """
    /api/public/quiz/<token>/start
    body: {"language": "en" | "te"}  (optional)
    """
    ser = StartAttemptSerializer(data=request.data)
    ser.is_valid(raise_exception=True)

    try:
        attempt = start_attempt(token, ser.validated_data.get("language"))
    except QuizPlayerError as e:
        return error_response(e)

    out = StartAttemptResponseSerializer(attempt).data
    return Response(out, status=status.HTTP_201_CREATED)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def answers(request, attempt_id):
    """
    /api/public/attempts/<attempt_id>/answers
    body: {"question_id": 1, "option_ids": [3, 4]}

    Safe to retry: the same body always leaves the same stored selection.
    """
    ser = SubmitAnswerSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    payload = ser.validated_data

    try:
        answer = submit_answer(attempt_id, payload["question_id"], payload["option_ids"])
    except QuizPlayerError as e:
        return error_response(e)

    out = ApiResponse(
        True,
        "Answer saved",
        data={
            "question_id": answer.question_id,
            "option_ids": sorted(set(payload["option_ids"])),
        },
    ).to_dict()
    return Response(out, status=status.HTTP_200_OK)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def submit(request, attempt_id):
    """
    /api/public/attempts/<attempt_id>/submit

    409 already_submitted means another submit won; fetch the results instead.
    """
    try:
        graded = submit_attempt(attempt_id)
    except QuizPlayerError as e:
        return error_response(e)

    return Response(_result_payload(graded), status=status.HTTP_200_OK)


@api_view(["GET"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def results(request, attempt_id):
    """
    /api/public/attempts/<attempt_id>
    """
    try:
        graded = get_attempt_results(attempt_id)
    except QuizPlayerError as e:
        return error_response(e)

    return Response(_result_payload(graded), status=status.HTTP_200_OK)
